"""
Balance account.

Accumulates credits into per-user balances.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from referral_settlement.repositories.balance_repository import BalanceRepository


class BalanceAccount:
    """Per-user running balance with store-level atomic credits."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize balance account."""
        self.session = session
        self.balance_repo = BalanceRepository(session)

    async def credit(self, user_id: int, delta: int) -> None:
        """
        Add a positive delta to a user's balance.

        Args:
            user_id: User ID
            delta: Amount to add, must be > 0

        Raises:
            ValueError: If delta is not positive
        """
        if delta <= 0:
            raise ValueError(f"Credit delta must be positive, got {delta}")

        await self.balance_repo.increment(user_id, delta)

    async def get_balance(self, user_id: int) -> int:
        """Get a user's balance, 0 if never credited."""
        return await self.balance_repo.get_balance(user_id)
