"""
Initialization - Database Module.

Builds the async engine and session factory. Both are created once at
process start and passed explicitly to the components that need them.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from referral_settlement.config.settings import Settings
from referral_settlement.models import Base


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create async engine.

    Args:
        settings: Application settings

    Returns:
        AsyncEngine bound to settings.database_url
    """
    options = {"echo": settings.database_echo, "pool_pre_ping": True}
    if not settings.database_url.startswith("sqlite"):
        options["pool_size"] = settings.database_pool_size

    engine = create_async_engine(settings.database_url, **options)
    logger.info(
        "Database engine created",
        extra={"dialect": engine.dialect.name, "pool_size": settings.database_pool_size},
    )
    return engine


def create_session_maker(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create session maker bound to engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info("Database tables ensured")
