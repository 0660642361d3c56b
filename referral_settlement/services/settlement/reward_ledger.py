"""
Reward ledger.

Records referral reward grants exactly once per (purchase, beneficiary, level).
"""

import uuid

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from referral_settlement.repositories.reward_repository import RewardRepository


class RewardLedger:
    """Idempotent writer of reward grants."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize reward ledger.

        Args:
            session: Async database session with an open transaction
        """
        self.session = session
        self.reward_repo = RewardRepository(session)

    async def grant_if_absent(
        self,
        purchase_id: uuid.UUID,
        buyer_id: int,
        beneficiary_id: int,
        level: int,
        amount: int,
    ) -> bool:
        """
        Record a grant unless it already exists.

        A duplicate is not an error: it means the reward was already paid.

        Args:
            purchase_id: Purchase ID
            buyer_id: Buyer user ID
            beneficiary_id: Referrer receiving the reward
            level: Referral level (1 or 2)
            amount: Reward amount, strictly positive

        Returns:
            True if the grant was newly created
        """
        created = await self.reward_repo.insert_if_absent(
            purchase_id=purchase_id,
            buyer_id=buyer_id,
            beneficiary_id=beneficiary_id,
            level=level,
            amount=amount,
        )

        if not created:
            logger.debug(
                "Reward grant already exists",
                extra={
                    "purchase_id": str(purchase_id),
                    "beneficiary_id": beneficiary_id,
                    "level": level,
                },
            )

        return created
