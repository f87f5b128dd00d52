"""Shared fixtures: in-memory database, services and an HTTP client."""

import os

# app.main builds the application at import time and needs a secret
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-testing-only-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import timedelta

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.config import Settings, get_settings
from app.core.security import JWTService, PasswordHasher
from app.database import get_db
from app.main import create_app
from app.services.identity_service import IdentityService

TEST_SECRET = "test-jwt-secret-for-testing-only-0123456789"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        jwt_expires_in_days=90,
        bcrypt_rounds=4,  # low rounds for fast tests
        api_prefix="/api/v1",
    )


@pytest.fixture
def api_prefix(settings: Settings) -> str:
    return settings.api_prefix


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key=TEST_SECRET, expires_in=timedelta(days=90))


@pytest.fixture
def identity_service(db_session, password_hasher, jwt_service) -> IdentityService:
    return IdentityService(db_session, password_hasher, jwt_service)


@pytest.fixture
def app(settings, session_maker):
    application = create_app(settings)

    async def override_get_db():
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_settings] = lambda: settings
    return application


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def user_data() -> dict:
    return {"name": "Jo", "email": "jo@example.com", "password": "secret1"}


@pytest.fixture
async def register(client, api_prefix):
    """Register a user over HTTP and return (token, user)."""

    async def _register(name="Jo", email="jo@example.com", password="secret1"):
        response = await client.post(
            f"{api_prefix}/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["token"], body["data"]["user"]

    return _register


@pytest.fixture
async def auth_headers(register) -> dict:
    token, _ = await register()
    return {"Authorization": f"Bearer {token}"}
