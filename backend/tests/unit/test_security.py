"""Unit tests for password hashing and access tokens."""
from datetime import timedelta

from agency.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_and_verify(self):
        hashed = get_password_hash("s3cret")
        assert hashed.startswith("pbkdf2_sha256$")
        assert verify_password("s3cret", hashed)
        assert not verify_password("wrong", hashed)

    def test_hashes_are_salted(self):
        assert get_password_hash("same") != get_password_hash("same")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("anything", "plain-text") is False
        assert verify_password("anything", "md5$1$a$b") is False


class TestAccessToken:

    def test_roundtrip(self):
        token = create_access_token({"sub": "user@test.com"})
        payload = decode_access_token(token)
        assert payload["sub"] == "user@test.com"
        assert "exp" in payload

    def test_expired_token(self):
        token = create_access_token({"sub": "user@test.com"}, expires_delta=timedelta(seconds=-10))
        assert decode_access_token(token) is None

    def test_tampered_token(self):
        token = create_access_token({"sub": "user@test.com"})
        assert decode_access_token(token + "x") is None
