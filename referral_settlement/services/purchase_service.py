"""
Purchase service.

Purchase intake and balance queries used by the HTTP layer.
"""

import uuid

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from referral_settlement.config.business_constants import PURCHASE_STATUSES
from referral_settlement.models.purchase import Purchase
from referral_settlement.repositories.purchase_repository import (
    PurchaseRepository,
)
from referral_settlement.services.settlement.balance_account import (
    BalanceAccount,
)
from referral_settlement.utils.exceptions import (
    InvalidPurchaseError,
    PurchaseConflictError,
)


class PurchaseService:
    """Creates purchases and reads balances."""

    def __init__(
        self, session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        """
        Initialize purchase service.

        Args:
            session_maker: Session factory bound to the shared store
        """
        self.session_maker = session_maker

    async def create_purchase(
        self,
        user_id: int,
        amount: int,
        status: str,
        purchase_id: uuid.UUID | None = None,
    ) -> Purchase:
        """
        Create a purchase.

        Args:
            user_id: Buyer user ID
            amount: Amount in the smallest currency unit, >= 0
            status: Purchase status string
            purchase_id: Optional caller-supplied ID, generated if None

        Returns:
            Created purchase

        Raises:
            InvalidPurchaseError: Negative amount or unknown status
            PurchaseConflictError: Purchase ID already exists
        """
        if amount < 0:
            raise InvalidPurchaseError("amount must be >= 0")
        if status not in PURCHASE_STATUSES:
            raise InvalidPurchaseError(
                f"status must be one of: {', '.join(PURCHASE_STATUSES)}"
            )

        if purchase_id is None:
            purchase_id = uuid.uuid4()

        try:
            async with self.session_maker() as session:
                async with session.begin():
                    purchase = await PurchaseRepository(session).create(
                        id=purchase_id,
                        user_id=user_id,
                        amount=amount,
                        status=status,
                    )
        except IntegrityError as e:
            if await self._purchase_exists(purchase_id):
                logger.warning(
                    "Duplicate purchase rejected",
                    extra={"purchase_id": str(purchase_id)},
                )
                raise PurchaseConflictError(purchase_id) from e
            raise

        logger.info(
            "Purchase created",
            extra={
                "purchase_id": str(purchase.id),
                "user_id": user_id,
                "amount": amount,
                "status": status,
            },
        )
        return purchase

    async def get_balance(self, user_id: int) -> int:
        """
        Get a user's balance.

        Args:
            user_id: User ID

        Returns:
            Balance, 0 if never credited
        """
        async with self.session_maker() as session:
            return await BalanceAccount(session).get_balance(user_id)

    async def _purchase_exists(self, purchase_id: uuid.UUID) -> bool:
        """Check whether a purchase ID is taken."""
        async with self.session_maker() as session:
            repo = PurchaseRepository(session)
            return await repo.count(id=purchase_id) > 0
