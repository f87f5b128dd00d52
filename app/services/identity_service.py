import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.errors import DuplicateIdentityError, InvalidCredentialsError
from app.core.security import JWTService, PasswordHasher
from app.models import User, UserPublic

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityService:
    """
    Registration, login and token-subject lookup.

    This is the only place that touches password hashes or signs and
    verifies tokens. The signing secret and token lifetime come in through
    the injected ``JWTService``.
    """

    def __init__(
        self,
        db: AsyncSession,
        password_hasher: PasswordHasher,
        jwt_service: JWTService,
    ):
        self._db = db
        self._password_hasher = password_hasher
        self._jwt_service = jwt_service

    async def _find_by_email(self, email: str) -> User | None:
        result = await self._db.exec(select(User).where(User.email == email))
        return result.first()

    async def register(
        self, name: str, email: str, password: str
    ) -> tuple[UserPublic, str]:
        email = normalize_email(email)

        if await self._find_by_email(email) is not None:
            raise DuplicateIdentityError()

        user = User(
            name=name,
            email=email,
            password_hash=self._password_hasher.hash(password),
        )
        self._db.add(user)
        try:
            await self._db.commit()
        except IntegrityError as e:
            # lost a race against a concurrent registration with the same email
            await self._db.rollback()
            raise DuplicateIdentityError() from e
        await self._db.refresh(user)

        token = self._jwt_service.create_access_token(user.id)
        logger.info("User registered: id=%s", user.id)
        return UserPublic.model_validate(user), token

    async def login(self, email: str, password: str) -> tuple[UserPublic, str]:
        if not email or not password:
            raise InvalidCredentialsError(
                "Please provide email and password!", status_code=400
            )

        user = await self._find_by_email(normalize_email(email))

        # same error for unknown email and wrong password
        if user is None or not self._password_hasher.verify(
            password, user.password_hash
        ):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        token = self._jwt_service.create_access_token(user.id)
        logger.info("User logged in: id=%s", user.id)
        return UserPublic.model_validate(user), token

    async def resolve_identity(self, user_id: int) -> User | None:
        return await self._db.get(User, user_id)

    def verify_token(self, token: str) -> int:
        """Return the user id a token was issued for."""
        return self._jwt_service.verify_token(token).user_id
