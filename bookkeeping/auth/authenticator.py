"""
Login gate.

The user list is a static seed; users are not created or removed at
runtime. Passwords are hashed with PBKDF2-SHA256 when the seed is
loaded and only the hashes are kept.
"""

import hashlib
import hmac
import os
from typing import Iterable, Optional

from bookkeeping.activity import get_logger
from bookkeeping.config import get_settings
from bookkeeping.ledger.errors import LedgerError
from bookkeeping.models.transaction import User


HASH_ALGORITHM = "pbkdf2_sha256"

# (username, password, full name)
DEFAULT_SEED_USERS: tuple[tuple[str, str, str], ...] = (
    ("Error19", "admin123", "Administrator"),
    ("user", "user123", "Standard User"),
)


class AuthenticationError(LedgerError):
    """Login failed, or an operation needs a logged-in user."""
    pass


def hash_password(
    password: str,
    iterations: Optional[int] = None,
    salt: Optional[bytes] = None,
) -> str:
    """Encode as `pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>`."""
    if iterations is None:
        iterations = get_settings().auth.hash_iterations
    if salt is None:
        salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{HASH_ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.split("$")
        salt = bytes.fromhex(salt_hex)
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False

    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(digest.hex(), digest_hex)


class Authenticator:
    """
    Checks credentials against the static user list.

    Usernames match exactly (case-sensitive).
    """

    def __init__(self, users: Iterable[User]):
        self._users = {user.username: user for user in users}
        self._logger = get_logger("bookkeeping.auth")

    @classmethod
    def from_seed(
        cls,
        seed: Iterable[tuple[str, str, str]] = DEFAULT_SEED_USERS,
        iterations: Optional[int] = None,
    ) -> "Authenticator":
        """Build from (username, password, full name) triples."""
        users = [
            User(
                username=username,
                full_name=full_name,
                password_hash=hash_password(password, iterations),
            )
            for username, password, full_name in seed
        ]
        return cls(users)

    @property
    def usernames(self) -> list[str]:
        return list(self._users)

    def authenticate(self, username: str, password: str) -> Optional[User]:
        """The matching User, or None when the credentials do not match."""
        user = self._users.get(username)
        if user is None or not verify_password(password, user.password_hash):
            self._logger.info("login_rejected", username=username)
            return None

        self._logger.info("login_accepted", username=username)
        return user
