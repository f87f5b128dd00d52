from datetime import timedelta

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader
from sqlmodel.ext.asyncio.session import AsyncSession
from typing_extensions import Annotated

from app.core.config import SettingsDep
from app.core.security import JWTService, PasswordHasher
from app.database import get_db
from app.models import CallerIdentity
from app.services.auth_gate import AuthenticationGate
from app.services.identity_service import IdentityService

DBSession = Annotated[AsyncSession, Depends(get_db)]

# raw header so the gate sees exactly what the client sent
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer <token>",
)


def get_password_hasher(settings: SettingsDep) -> PasswordHasher:
    return PasswordHasher(rounds=settings.bcrypt_rounds)


def get_jwt_service(settings: SettingsDep) -> JWTService:
    return JWTService(
        secret_key=settings.jwt_secret,
        expires_in=timedelta(days=settings.jwt_expires_in_days),
    )


def get_identity_service(
    db: DBSession,
    password_hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> IdentityService:
    return IdentityService(db, password_hasher, jwt_service)


IdentityServiceDep = Annotated[IdentityService, Depends(get_identity_service)]


async def get_current_user(
    identity_service: IdentityServiceDep,
    authorization: Annotated[str | None, Security(authorization_header)] = None,
) -> CallerIdentity:
    return await AuthenticationGate(identity_service).authenticate(authorization)


CurrentUser = Annotated[CallerIdentity, Depends(get_current_user)]
