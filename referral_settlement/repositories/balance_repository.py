"""
Balance repository.

Data access layer for Balance model.
"""

from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_settlement.models.balance import Balance
from referral_settlement.repositories.base import BaseRepository


class BalanceRepository(BaseRepository[Balance]):
    """Balance repository with atomic increments."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize balance repository."""
        super().__init__(Balance, session)

    async def increment(self, user_id: int, delta: int) -> None:
        """
        Add delta to a user's balance, creating the row on first use.

        Single INSERT ... ON CONFLICT DO UPDATE statement, so concurrent
        increments for the same user never lose an update.

        Args:
            user_id: User ID
            delta: Amount to add
        """
        now = datetime.now(UTC)
        insert_stmt = self.upsert_insert().values(
            user_id=user_id, balance=delta, updated_at=now
        )
        stmt = insert_stmt.on_conflict_do_update(
            index_elements=[Balance.user_id],
            set_={
                "balance": Balance.balance + insert_stmt.excluded.balance,
                "updated_at": now,
            },
        )
        await self.session.execute(stmt)

    async def get_balance(self, user_id: int) -> int:
        """
        Get a user's balance.

        Args:
            user_id: User ID

        Returns:
            Current balance, 0 if the user was never credited
        """
        stmt = select(Balance.balance).where(Balance.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() or 0
