"""
Repositories package.

Data access layer: one repository per model, all sharing the caller's
AsyncSession so they run inside the caller's transaction.
"""

from referral_settlement.repositories.balance_repository import BalanceRepository
from referral_settlement.repositories.base import BaseRepository
from referral_settlement.repositories.purchase_repository import PurchaseRepository
from referral_settlement.repositories.reward_repository import RewardRepository
from referral_settlement.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "BalanceRepository",
    "PurchaseRepository",
    "RewardRepository",
    "UserRepository",
]
