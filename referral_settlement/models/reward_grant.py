"""
RewardGrant model.

Durable record that a referral reward was paid for a purchase.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    SmallInteger,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from referral_settlement.models.base import Base
from referral_settlement.models.types import MoneyType, UserIdType


class RewardGrant(Base):
    """
    RewardGrant entity.

    At most one row exists per (purchase, beneficiary, level). The unique
    constraint is what makes repeated settlement idempotent; rows are
    never updated or deleted.

    Attributes:
        id: Primary key
        purchase_id: Settled purchase
        user_id: Buyer who made the purchase
        beneficiary_user_id: Referrer receiving the reward
        level: Referral level (1 or 2)
        amount: Reward amount in the smallest currency unit
        created_at: When the grant was recorded
    """

    __tablename__ = "rewards"
    __table_args__ = (
        UniqueConstraint(
            "purchase_id",
            "beneficiary_user_id",
            "level",
            name="uq_rewards_purchase_beneficiary_level",
        ),
        CheckConstraint("level IN (1, 2)", name="level_valid"),
        CheckConstraint("amount > 0", name="amount_positive"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    purchase_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("purchases.id", ondelete="RESTRICT"),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(UserIdType, nullable=False)
    beneficiary_user_id: Mapped[int] = mapped_column(
        UserIdType,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    level: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    amount: Mapped[int] = mapped_column(MoneyType, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<RewardGrant(purchase_id={self.purchase_id}, "
            f"beneficiary={self.beneficiary_user_id}, level={self.level}, "
            f"amount={self.amount})>"
        )
