"""Tests for PBKDF2 password hashing."""

from vsradmin.services.passwords import ALGORITHM, hash_password, verify_password


class TestPasswords:

    def test_hash_format(self):
        encoded = hash_password("s3cret", iterations=1000)

        algorithm, iterations, salt, digest = encoded.split("$")
        assert algorithm == ALGORITHM
        assert iterations == "1000"
        assert len(salt) == 32
        assert len(digest) == 64

    def test_verify_correct_and_wrong_password(self):
        encoded = hash_password("s3cret", iterations=1000)

        assert verify_password("s3cret", encoded)
        assert not verify_password("S3cret", encoded)

    def test_salts_differ(self):
        assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)

    def test_malformed_hash_never_verifies(self):
        assert not verify_password("anything", "plaintext")
        assert not verify_password("anything", "md5$1$zz$00")
        assert not verify_password("anything", "pbkdf2_sha256$many$00$00")
