"""Authentication package."""

from bookkeeping.auth.authenticator import (
    DEFAULT_SEED_USERS,
    AuthenticationError,
    Authenticator,
    hash_password,
    verify_password,
)

__all__ = [
    "DEFAULT_SEED_USERS",
    "AuthenticationError",
    "Authenticator",
    "hash_password",
    "verify_password",
]
