import logging
from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from app import models  # noqa: F401  registers tables on SQLModel.metadata
from app.core.config import get_settings

logger = logging.getLogger(__name__)


# Create async engine
@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        future=True,
        pool_pre_ping=True,
    )


# Create async session factory using async_sessionmaker
@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Dependency for getting DB session
async def get_db():
    async with get_sessionmaker()() as session:
        yield session
        await session.close()


# Helper function to create tables (migrations are the normal path)
async def create_db_and_tables():
    async with get_engine().begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables ensured")


async def dispose_engine():
    await get_engine().dispose()
    get_engine.cache_clear()
    get_sessionmaker.cache_clear()
