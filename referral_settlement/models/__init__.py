"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from referral_settlement.models.balance import Balance
from referral_settlement.models.base import Base
from referral_settlement.models.purchase import Purchase
from referral_settlement.models.reward_grant import RewardGrant
from referral_settlement.models.user import User

__all__ = [
    # Base
    "Base",
    # Core Models
    "User",
    "Purchase",
    "RewardGrant",
    "Balance",
]
