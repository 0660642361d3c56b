"""
Settlement services package.

Contains the components of purchase settlement:
- percent_calculator: Integer reward math
- chain_resolver: Active level 1 / level 2 referrer lookup
- reward_ledger: Idempotent reward grant recording
- balance_account: Atomic balance credits
- orchestrator: Transaction boundary tying the above together
"""

from referral_settlement.services.settlement.balance_account import BalanceAccount
from referral_settlement.services.settlement.chain_resolver import (
    ReferralChain,
    ReferralChainResolver,
)
from referral_settlement.services.settlement.orchestrator import (
    GrantOutcome,
    SettlementOrchestrator,
    SettlementResult,
)
from referral_settlement.services.settlement.percent_calculator import percent_of
from referral_settlement.services.settlement.reward_ledger import RewardLedger

__all__ = [
    "percent_of",
    "ReferralChain",
    "ReferralChainResolver",
    "RewardLedger",
    "BalanceAccount",
    "SettlementOrchestrator",
    "SettlementResult",
    "GrantOutcome",
]
