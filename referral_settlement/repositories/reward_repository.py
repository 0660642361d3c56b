"""
Reward repository.

Data access layer for RewardGrant model.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from referral_settlement.models.reward_grant import RewardGrant
from referral_settlement.repositories.base import BaseRepository


class RewardRepository(BaseRepository[RewardGrant]):
    """Reward grant repository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize reward repository."""
        super().__init__(RewardGrant, session)

    async def insert_if_absent(
        self,
        purchase_id: uuid.UUID,
        buyer_id: int,
        beneficiary_id: int,
        level: int,
        amount: int,
    ) -> bool:
        """
        Insert a grant unless one exists for (purchase, beneficiary, level).

        Uses INSERT ... ON CONFLICT DO NOTHING so a duplicate, even one
        racing in another transaction, is absorbed by the unique
        constraint instead of raising.

        Args:
            purchase_id: Purchase ID
            buyer_id: Buyer user ID
            beneficiary_id: Referrer receiving the reward
            level: Referral level
            amount: Reward amount

        Returns:
            True if a new row was inserted
        """
        stmt = (
            self.upsert_insert()
            .values(
                purchase_id=purchase_id,
                user_id=buyer_id,
                beneficiary_user_id=beneficiary_id,
                level=level,
                amount=amount,
            )
            .on_conflict_do_nothing(
                index_elements=[
                    RewardGrant.purchase_id,
                    RewardGrant.beneficiary_user_id,
                    RewardGrant.level,
                ]
            )
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1
