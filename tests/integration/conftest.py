"""
Shared fixtures for integration tests.

Runs against a file-backed SQLite database through aiosqlite. Every
transaction starts with BEGIN IMMEDIATE, so concurrent writers serialize
the way SELECT ... FOR UPDATE serializes them on PostgreSQL.
"""

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import event

from referral_settlement.config.settings import Settings
from referral_settlement.initialization.database import (
    create_engine_from_settings,
    create_session_maker,
    init_models,
)
from referral_settlement.models import Purchase, User


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a temporary SQLite database."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'settlement.db'}",
        settle_timeout_seconds=5.0,
        environment="test",
    )


@pytest_asyncio.fixture
async def engine(settings):
    """Async engine with immediate transactions and created tables."""
    engine = create_engine_from_settings(settings)

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    """Session factory bound to the test engine."""
    return create_session_maker(engine)


@pytest.fixture
def seed_users(session_maker):
    """Insert users given as {id: (referrer_id, is_active)}."""

    async def _seed(users: dict[int, tuple[int | None, bool]]) -> None:
        async with session_maker() as session:
            async with session.begin():
                for user_id, (_, is_active) in users.items():
                    session.add(User(id=user_id, is_active=is_active))
                await session.flush()
                for user_id, (referrer_id, _) in users.items():
                    if referrer_id is not None:
                        user = await session.get(User, user_id)
                        user.referrer_id = referrer_id

    return _seed


@pytest.fixture
def seed_purchase(session_maker):
    """Insert a purchase and return its ID."""

    async def _seed(user_id: int, amount: int, status: str = "captured") -> uuid.UUID:
        purchase_id = uuid.uuid4()
        async with session_maker() as session:
            async with session.begin():
                session.add(
                    Purchase(id=purchase_id, user_id=user_id, amount=amount, status=status)
                )
        return purchase_id

    return _seed
