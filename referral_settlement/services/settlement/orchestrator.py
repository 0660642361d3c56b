"""
Settlement orchestrator.

Single entry point that turns a captured purchase into referral reward
grants and balance credits inside one transaction.
"""

import uuid
from dataclasses import dataclass, field

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from referral_settlement.config.business_constants import (
    PURCHASE_STATUS_CAPTURED,
    REFERRAL_PERCENTS,
)
from referral_settlement.repositories.purchase_repository import (
    PurchaseRepository,
)
from referral_settlement.services.settlement.balance_account import (
    BalanceAccount,
)
from referral_settlement.services.settlement.chain_resolver import (
    ReferralChainResolver,
)
from referral_settlement.services.settlement.percent_calculator import (
    percent_of,
)
from referral_settlement.services.settlement.reward_ledger import RewardLedger
from referral_settlement.utils.exceptions import (
    PurchaseNotFoundError,
    SettlementStoreError,
)


@dataclass(frozen=True)
class GrantOutcome:
    """Outcome of one reward grant attempt."""

    level: int
    beneficiary_id: int
    amount: int
    created: bool


@dataclass
class SettlementResult:
    """Result of settling a purchase."""

    purchase_id: uuid.UUID
    status: str
    grants: list[GrantOutcome] = field(default_factory=list)

    @property
    def settled(self) -> bool:
        """Whether the purchase was eligible for rewards."""
        return self.status == PURCHASE_STATUS_CAPTURED

    @property
    def credited_total(self) -> int:
        """Total credited by this call (newly created grants only)."""
        return sum(g.amount for g in self.grants if g.created)


class SettlementOrchestrator:
    """
    Settles purchases into referral rewards.

    Concurrent calls for the same purchase are serialized by the purchase
    row lock. A balance is credited only when its grant was inserted by
    the same call, so retries and concurrent duplicates never pay twice.
    """

    def __init__(
        self, session_maker: async_sessionmaker[AsyncSession]
    ) -> None:
        """
        Initialize settlement orchestrator.

        Args:
            session_maker: Session factory bound to the shared store
        """
        self.session_maker = session_maker

    async def settle(self, purchase_id: uuid.UUID) -> SettlementResult:
        """
        Settle a purchase.

        Non-captured purchases commit a no-op transaction and succeed.
        If the awaiting task is cancelled, the session context rolls the
        transaction back and the row lock is released.

        Args:
            purchase_id: Purchase ID

        Returns:
            SettlementResult describing grants attempted in this call

        Raises:
            PurchaseNotFoundError: Purchase does not exist
            SettlementStoreError: Data-access failure, transaction rolled back
        """
        try:
            async with self.session_maker() as session:
                async with session.begin():
                    result = await self._settle_in_transaction(
                        session, purchase_id
                    )
        except SQLAlchemyError as e:
            logger.opt(exception=True).error(
                "Settlement aborted by store failure",
                extra={"purchase_id": str(purchase_id), "error": str(e)},
            )
            raise SettlementStoreError(purchase_id, e) from e

        logger.info(
            "Purchase settled",
            extra={
                "purchase_id": str(purchase_id),
                "status": result.status,
                "grants_created": sum(1 for g in result.grants if g.created),
                "grants_skipped": sum(1 for g in result.grants if not g.created),
                "credited_total": result.credited_total,
            },
        )
        return result

    async def _settle_in_transaction(
        self, session: AsyncSession, purchase_id: uuid.UUID
    ) -> SettlementResult:
        """Run settlement steps; caller owns the transaction."""
        purchase = await PurchaseRepository(session).get_for_update(purchase_id)
        if purchase is None:
            raise PurchaseNotFoundError(purchase_id)

        result = SettlementResult(purchase_id=purchase.id, status=purchase.status)
        if not result.settled:
            logger.debug(
                "Purchase not captured, nothing to settle",
                extra={"purchase_id": str(purchase_id), "status": purchase.status},
            )
            return result

        chain = await ReferralChainResolver(session).resolve(purchase.user_id)
        ledger = RewardLedger(session)

        for level, beneficiary_id in chain.beneficiaries():
            amount = percent_of(purchase.amount, REFERRAL_PERCENTS[level])
            if amount <= 0:
                continue

            created = await ledger.grant_if_absent(
                purchase_id=purchase.id,
                buyer_id=purchase.user_id,
                beneficiary_id=beneficiary_id,
                level=level,
                amount=amount,
            )
            result.grants.append(
                GrantOutcome(
                    level=level,
                    beneficiary_id=beneficiary_id,
                    amount=amount,
                    created=created,
                )
            )

        # Ascending user id keeps balance row locks in one global order
        account = BalanceAccount(session)
        new_grants = sorted(
            (g for g in result.grants if g.created),
            key=lambda g: (g.beneficiary_id, g.level),
        )
        for grant in new_grants:
            await account.credit(grant.beneficiary_id, grant.amount)

        return result
