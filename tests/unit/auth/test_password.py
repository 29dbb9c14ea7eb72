"""Unit tests for BcryptPasswordHasher."""

import pytest

from infrastructure.auth.password import BcryptPasswordHasher


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


class TestBcryptPasswordHasher:
    def test_hash_is_not_plaintext(self, hasher: BcryptPasswordHasher):
        hashed = hasher.hash("secret1")

        assert hashed != "secret1"
        assert hashed.startswith("$2")

    def test_same_password_hashes_differently(self, hasher: BcryptPasswordHasher):
        assert hasher.hash("secret1") != hasher.hash("secret1")

    def test_verify_accepts_correct_password(self, hasher: BcryptPasswordHasher):
        assert hasher.verify("secret1", hasher.hash("secret1"))

    def test_verify_rejects_wrong_password(self, hasher: BcryptPasswordHasher):
        assert not hasher.verify("secret2", hasher.hash("secret1"))

    def test_verify_rejects_non_bcrypt_value(self, hasher: BcryptPasswordHasher):
        assert not hasher.verify("secret1", "plaintext")

    def test_long_passwords_are_truncated_consistently(self, hasher: BcryptPasswordHasher):
        password = "x" * 100

        assert hasher.verify(password, hasher.hash(password))
