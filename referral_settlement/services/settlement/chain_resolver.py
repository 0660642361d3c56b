"""
Referral chain resolver.

Finds the active level 1 and level 2 referrers of a buyer.
"""

from dataclasses import dataclass

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from referral_settlement.repositories.user_repository import UserRepository


@dataclass(frozen=True)
class ReferralChain:
    """Active referrers of a buyer; level2 is only set when level1 is."""

    level1: int | None = None
    level2: int | None = None

    def beneficiaries(self) -> list[tuple[int, int]]:
        """Return (level, user_id) pairs for the present levels."""
        pairs = []
        if self.level1 is not None:
            pairs.append((1, self.level1))
            if self.level2 is not None:
                pairs.append((2, self.level2))
        return pairs


class ReferralChainResolver:
    """Resolves the two-level referral chain inside the caller's transaction."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize chain resolver.

        Args:
            session: Async database session with an open transaction
        """
        self.session = session
        self.user_repo = UserRepository(session)

    async def resolve(self, buyer_id: int) -> ReferralChain:
        """
        Resolve active referrers of a buyer.

        Walks exactly two links. The walk stops at the first missing or
        inactive referrer, so an inactive level 1 referrer also suppresses
        level 2.

        Args:
            buyer_id: Buyer user ID

        Returns:
            ReferralChain with the active referrers
        """
        level1 = await self._active_referrer(buyer_id)
        if level1 is None:
            return ReferralChain()

        level2 = await self._active_referrer(level1)
        return ReferralChain(level1=level1, level2=level2)

    async def _active_referrer(self, user_id: int) -> int | None:
        """
        Get a user's referrer if that referrer is active.

        Args:
            user_id: User whose referrer to look up

        Returns:
            Referrer user ID or None
        """
        link = await self.user_repo.get_referral_link(user_id)
        if link is None:
            logger.warning(
                "User not found while resolving referral chain",
                extra={"user_id": user_id},
            )
            return None

        if link.referrer_id is None:
            return None

        referrer = await self.user_repo.get_referral_link(link.referrer_id)
        if referrer is None or not referrer.is_active:
            logger.debug(
                "Referrer missing or inactive",
                extra={"user_id": user_id, "referrer_id": link.referrer_id},
            )
            return None

        return referrer.id
