"""
Unit tests for SettlementOrchestrator.

Tests cover:
- Status gating
- Not-found purchases
- Grant-gated crediting
- Zero-amount rewards
- Credit ordering
- Store failure wrapping and rollback
- Store failure traceback logging
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from loguru import logger
from sqlalchemy.exc import OperationalError

from referral_settlement.services.settlement.chain_resolver import ReferralChain
from referral_settlement.services.settlement.orchestrator import (
    SettlementOrchestrator,
)
from referral_settlement.utils.exceptions import (
    PurchaseNotFoundError,
    SettlementStoreError,
)

MODULE = "referral_settlement.services.settlement.orchestrator"


@pytest.fixture
def collaborators():
    """Patch repository and settlement components used by the orchestrator."""
    with (
        patch(f"{MODULE}.PurchaseRepository") as purchase_repo_cls,
        patch(f"{MODULE}.ReferralChainResolver") as resolver_cls,
        patch(f"{MODULE}.RewardLedger") as ledger_cls,
        patch(f"{MODULE}.BalanceAccount") as account_cls,
    ):
        purchase_repo = MagicMock()
        purchase_repo.get_for_update = AsyncMock()
        purchase_repo_cls.return_value = purchase_repo

        resolver = MagicMock()
        resolver.resolve = AsyncMock(return_value=ReferralChain(level1=2, level2=3))
        resolver_cls.return_value = resolver

        ledger = MagicMock()
        ledger.grant_if_absent = AsyncMock(return_value=True)
        ledger_cls.return_value = ledger

        account = MagicMock()
        account.credit = AsyncMock()
        account_cls.return_value = account

        yield MagicMock(
            purchase_repo=purchase_repo,
            resolver=resolver,
            ledger=ledger,
            account=account,
        )


class TestStatusGating:
    """Only captured purchases are settled."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["authorized", "refunded", "voided"])
    async def test_non_captured_is_noop(
        self, mock_session_maker, collaborators, make_purchase, purchase_id, status
    ):
        """Non-captured purchase returns success without grants."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase(status)

        result = await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        assert result.settled is False
        assert result.grants == []
        collaborators.resolver.resolve.assert_not_awaited()
        collaborators.ledger.grant_if_absent.assert_not_awaited()
        collaborators.account.credit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_not_found(self, mock_session_maker, mock_session, collaborators, purchase_id):
        """Missing purchase raises PurchaseNotFoundError and aborts the transaction."""
        collaborators.purchase_repo.get_for_update.return_value = None

        with pytest.raises(PurchaseNotFoundError) as exc_info:
            await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        assert exc_info.value.purchase_id == purchase_id
        assert mock_session.begin.return_value.exit_exc_types == [PurchaseNotFoundError]


class TestRewardDistribution:
    """Grants and credits for captured purchases."""

    @pytest.mark.asyncio
    async def test_both_levels_granted_and_credited(
        self, mock_session_maker, collaborators, make_purchase, purchase_id
    ):
        """Captured purchase of 1000 pays 100 to R1 and 50 to R2."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase(
            amount=1000, user_id=1
        )

        result = await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        assert result.settled is True
        assert result.credited_total == 150
        collaborators.resolver.resolve.assert_awaited_once_with(1)
        assert collaborators.ledger.grant_if_absent.await_count == 2
        collaborators.ledger.grant_if_absent.assert_any_await(
            purchase_id=purchase_id, buyer_id=1, beneficiary_id=2, level=1, amount=100
        )
        collaborators.ledger.grant_if_absent.assert_any_await(
            purchase_id=purchase_id, buyer_id=1, beneficiary_id=3, level=2, amount=50
        )
        credits = [c.args for c in collaborators.account.credit.await_args_list]
        assert credits == [(2, 100), (3, 50)]

    @pytest.mark.asyncio
    async def test_existing_grants_are_not_credited(
        self, mock_session_maker, collaborators, make_purchase, purchase_id
    ):
        """Duplicate grant attempt skips the credit."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase()
        collaborators.ledger.grant_if_absent.return_value = False

        result = await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        assert [g.created for g in result.grants] == [False, False]
        assert result.credited_total == 0
        collaborators.account.credit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_new_grant_is_credited(
        self, mock_session_maker, collaborators, make_purchase, purchase_id
    ):
        """Level 1 already granted, level 2 new: only level 2 credited."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase()
        collaborators.ledger.grant_if_absent.side_effect = [False, True]

        await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        collaborators.account.credit.assert_awaited_once_with(3, 50)

    @pytest.mark.asyncio
    async def test_zero_reward_is_not_granted(
        self, mock_session_maker, collaborators, make_purchase, purchase_id
    ):
        """Amount 15 pays 1 at level 1 and nothing at level 2."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase(amount=15)

        result = await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        assert [(g.level, g.amount) for g in result.grants] == [(1, 1)]
        collaborators.ledger.grant_if_absent.assert_awaited_once()
        collaborators.account.credit.assert_awaited_once_with(2, 1)

    @pytest.mark.asyncio
    async def test_empty_chain(
        self, mock_session_maker, collaborators, make_purchase, purchase_id
    ):
        """No active referrers means no grants."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase()
        collaborators.resolver.resolve.return_value = ReferralChain()

        result = await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        assert result.settled is True
        assert result.grants == []
        collaborators.ledger.grant_if_absent.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_credits_in_ascending_user_order(
        self, mock_session_maker, collaborators, make_purchase, purchase_id
    ):
        """Level 2 beneficiary with lower ID is credited first."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase()
        collaborators.resolver.resolve.return_value = ReferralChain(level1=9, level2=4)

        await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        credits = [c.args for c in collaborators.account.credit.await_args_list]
        assert credits == [(4, 50), (9, 100)]


class TestStoreFailures:
    """Data-access errors abort and surface as SettlementStoreError."""

    @pytest.mark.asyncio
    async def test_store_error_is_wrapped(
        self, mock_session_maker, mock_session, collaborators, make_purchase, purchase_id
    ):
        """OperationalError during a credit rolls back and is wrapped."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase()
        failure = OperationalError("UPDATE balances", {}, Exception("connection lost"))
        collaborators.account.credit.side_effect = failure

        with pytest.raises(SettlementStoreError) as exc_info:
            await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        assert exc_info.value.__cause__ is failure
        assert exc_info.value.purchase_id == purchase_id
        assert mock_session.begin.return_value.exit_exc_types == [OperationalError]

    @pytest.mark.asyncio
    async def test_lock_failure_is_wrapped(
        self, mock_session_maker, collaborators, purchase_id
    ):
        """Failure acquiring the purchase lock is a store failure."""
        collaborators.purchase_repo.get_for_update.side_effect = OperationalError(
            "SELECT ... FOR UPDATE", {}, Exception("lock timeout")
        )

        with pytest.raises(SettlementStoreError):
            await SettlementOrchestrator(mock_session_maker).settle(purchase_id)

        collaborators.ledger.grant_if_absent.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_error_logs_traceback(
        self, mock_session_maker, collaborators, make_purchase, purchase_id
    ):
        """Store failure log record carries the original exception."""
        collaborators.purchase_repo.get_for_update.return_value = make_purchase()
        collaborators.account.credit.side_effect = OperationalError(
            "UPDATE balances", {}, Exception("connection lost")
        )
        records = []
        handler_id = logger.add(lambda message: records.append(message.record), level="ERROR")

        try:
            with pytest.raises(SettlementStoreError):
                await SettlementOrchestrator(mock_session_maker).settle(purchase_id)
        finally:
            logger.remove(handler_id)

        assert len(records) == 1
        assert records[0]["message"] == "Settlement aborted by store failure"
        assert records[0]["exception"] is not None
        assert records[0]["exception"].type is OperationalError
