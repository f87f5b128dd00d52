"""Unit tests for PasswordHasher and JWTService."""

from datetime import timedelta

import jwt
import pytest

from app.core.errors import ErrorKind, InvalidTokenError, TokenExpiredError
from app.core.security import JWTService, PasswordHasher

SECRET = "unit-test-secret-key-with-enough-length-123"


class TestPasswordHasher:
    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_bcrypt_and_not_plaintext(self):
        hashed = self.hasher.hash("secret1")

        assert hashed.startswith("$2")
        assert hashed != "secret1"

    def test_verify_correct_and_incorrect_password(self):
        hashed = self.hasher.hash("secret1")

        assert self.hasher.verify("secret1", hashed) is True
        assert self.hasher.verify("secret2", hashed) is False

    def test_same_password_hashes_differently(self):
        first = self.hasher.hash("same-password")
        second = self.hasher.hash("same-password")

        assert first != second
        assert self.hasher.verify("same-password", first)
        assert self.hasher.verify("same-password", second)

    def test_verify_malformed_hash_returns_false(self):
        assert self.hasher.verify("secret1", "not-a-bcrypt-hash") is False
        assert self.hasher.verify("secret1", "") is False

    def test_long_passwords_are_accepted(self):
        password = "x" * 100
        hashed = self.hasher.hash(password)

        assert self.hasher.verify(password, hashed)


class TestJWTService:
    def setup_method(self):
        self.service = JWTService(secret_key=SECRET)

    def test_empty_secret_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")

    def test_round_trip_carries_user_id(self):
        token = self.service.create_access_token(42)

        payload = self.service.verify_token(token)

        assert payload.user_id == 42
        assert payload.expires_at > payload.issued_at

    def test_default_lifetime_is_ninety_days(self):
        payload = self.service.verify_token(self.service.create_access_token(1))

        lifetime = payload.expires_at - payload.issued_at
        assert lifetime == timedelta(days=90)

    def test_custom_lifetime(self):
        service = JWTService(secret_key=SECRET, expires_in=timedelta(hours=1))

        payload = service.verify_token(service.create_access_token(1))

        assert payload.expires_at - payload.issued_at == timedelta(hours=1)

    def test_subject_claim_is_string(self):
        token = self.service.create_access_token(7)

        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["sub"] == "7"

    def test_expired_token_raises_expired_error(self):
        token = self.service.create_access_token(1, expires_delta=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError) as exc_info:
            self.service.verify_token(token)
        assert exc_info.value.kind is ErrorKind.TOKEN_EXPIRED
        assert exc_info.value.status_code == 401

    def test_garbage_token_raises_invalid_error(self):
        with pytest.raises(InvalidTokenError) as exc_info:
            self.service.verify_token("not.a.token")
        assert exc_info.value.kind is ErrorKind.TOKEN_INVALID

    def test_wrong_secret_raises_invalid_error(self):
        other = JWTService(secret_key="another-secret-key-with-enough-length-456")
        token = other.create_access_token(1)

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_tampered_token_raises_invalid_error(self):
        token = self.service.create_access_token(1)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(tampered)

    def test_unsigned_token_raises_invalid_error(self):
        token = jwt.encode({"sub": "1", "exp": 9999999999}, key=None, algorithm="none")

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_token_without_subject_raises_invalid_error(self):
        token = jwt.encode({"exp": 9999999999}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_non_numeric_subject_raises_invalid_error(self):
        token = jwt.encode({"sub": "abc", "exp": 9999999999}, SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_expired_is_not_reported_as_invalid(self):
        token = self.service.create_access_token(1, expires_delta=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError) as exc_info:
            self.service.verify_token(token)
        assert not isinstance(exc_info.value, InvalidTokenError)
