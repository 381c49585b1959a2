"""Tests for bcrypt password helpers."""

from isdapresyo.auth.passwords import hash_password, verify_password

ROUNDS = 4


class TestPasswords:
    def test_hash_verifies(self):
        hashed = hash_password("s3cret!", rounds=ROUNDS)
        assert hashed.startswith("$2")
        assert verify_password("s3cret!", hashed)

    def test_wrong_password(self):
        hashed = hash_password("s3cret!", rounds=ROUNDS)
        assert not verify_password("S3cret!", hashed)

    def test_salted(self):
        assert hash_password("same", rounds=ROUNDS) != hash_password("same", rounds=ROUNDS)

    def test_non_bcrypt_hash_is_rejected(self):
        assert verify_password("anything", "plaintext-in-db") is False

    def test_long_password_truncated_to_72_bytes(self):
        base = "x" * 72
        hashed = hash_password(base + "tail-one", rounds=ROUNDS)
        assert verify_password(base + "tail-two", hashed)
