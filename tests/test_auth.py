"""Tests for the login gate."""

import pytest

from bookkeeping.auth import (
    DEFAULT_SEED_USERS,
    Authenticator,
    hash_password,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_format(self):
        encoded = hash_password("admin123", iterations=1000, salt=b"\x00" * 16)
        algorithm, iterations, salt, digest = encoded.split("$")
        assert algorithm == "pbkdf2_sha256"
        assert iterations == "1000"
        assert salt == "00" * 16
        assert len(digest) == 64

    def test_iterations_from_settings(self):
        assert hash_password("x").split("$")[1] == "1000"

    def test_salted(self):
        assert hash_password("admin123") != hash_password("admin123")

    def test_verify(self):
        encoded = hash_password("admin123")
        assert verify_password("admin123", encoded) is True
        assert verify_password("admin124", encoded) is False

    @pytest.mark.parametrize("encoded", [
        "",
        "plaintext",
        "md5$1000$00$00",
        "pbkdf2_sha256$many$00$00",
        "pbkdf2_sha256$1000$zz$00",
    ])
    def test_malformed_hash_never_matches(self, encoded):
        assert verify_password("anything", encoded) is False


class TestAuthenticator:

    @pytest.fixture
    def authenticator(self):
        return Authenticator.from_seed()

    def test_seed_users(self, authenticator):
        assert authenticator.usernames == [u for u, _, _ in DEFAULT_SEED_USERS]

    def test_administrator_login(self, authenticator):
        user = authenticator.authenticate("Error19", "admin123")
        assert user.full_name == "Administrator"

    def test_standard_user_login(self, authenticator):
        assert authenticator.authenticate("user", "user123").full_name == "Standard User"

    def test_wrong_password(self, authenticator):
        assert authenticator.authenticate("Error19", "user123") is None

    def test_unknown_user(self, authenticator):
        assert authenticator.authenticate("admin", "admin123") is None

    def test_username_is_case_sensitive(self, authenticator):
        assert authenticator.authenticate("error19", "admin123") is None

    def test_plaintext_not_kept(self, authenticator):
        user = authenticator.authenticate("user", "user123")
        assert "user123" not in user.password_hash

    def test_custom_seed(self):
        authenticator = Authenticator.from_seed([("clerk", "pw", "Clerk")], iterations=1000)
        assert authenticator.authenticate("clerk", "pw").username == "clerk"
        assert authenticator.authenticate("user", "user123") is None
