from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from app.core.errors import InvalidTokenError, TokenExpiredError

# bcrypt only considers the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """bcrypt hashing and verification for user passwords."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    @staticmethod
    def _encode(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # malformed hash
            return False


@dataclass(frozen=True)
class TokenPayload:
    user_id: int
    issued_at: datetime
    expires_at: datetime


class JWTService:
    """
    Signs and verifies HS256 access tokens.

    Tokens only carry the user id (``sub``) plus issue and expiry instants.
    They are not stored anywhere: a token is valid for as long as its
    signature checks out and ``exp`` lies in the future.
    """

    ALGORITHM = "HS256"
    DEFAULT_EXPIRES_IN = timedelta(days=90)

    def __init__(self, secret_key: str, expires_in: timedelta = DEFAULT_EXPIRES_IN):
        if not secret_key:
            raise ValueError("JWT secret key cannot be empty")
        self._secret_key = secret_key
        self._expires_in = expires_in

    def create_access_token(
        self, user_id: int, expires_delta: timedelta | None = None
    ) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + (expires_delta or self._expires_in),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """
        Decode ``token`` and return its payload.

        Raises:
            TokenExpiredError: signature is valid but ``exp`` has passed
            InvalidTokenError: anything else (bad signature, malformed token,
                missing or non-numeric subject)
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
            return TokenPayload(
                user_id=int(payload["sub"]),
                issued_at=datetime.fromtimestamp(payload.get("iat", 0), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError() from e
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError() from e
