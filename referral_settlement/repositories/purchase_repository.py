"""
Purchase repository.

Data access layer for Purchase model.
"""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_settlement.models.purchase import Purchase
from referral_settlement.repositories.base import BaseRepository


class PurchaseRepository(BaseRepository[Purchase]):
    """Purchase repository with locking reads."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize purchase repository."""
        super().__init__(Purchase, session)

    async def get_for_update(self, purchase_id: uuid.UUID) -> Purchase | None:
        """
        Get purchase with an exclusive row lock (SELECT ... FOR UPDATE).

        Concurrent callers for the same purchase block here until the
        holder's transaction commits or rolls back.

        Args:
            purchase_id: Purchase ID

        Returns:
            Locked purchase or None if not found
        """
        stmt = (
            select(Purchase)
            .where(Purchase.id == purchase_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
