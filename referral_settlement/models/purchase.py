"""
Purchase model.

Purchases are written by the intake side and only read (under lock) by
settlement.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from referral_settlement.config.business_constants import PURCHASE_STATUSES
from referral_settlement.models.base import Base
from referral_settlement.models.types import MoneyType, UserIdType


_STATUS_LIST = ", ".join(f"'{status}'" for status in PURCHASE_STATUSES)


class Purchase(Base):
    """
    Purchase entity.

    Attributes:
        id: Purchase UUID, supplied by the caller or generated
        user_id: Buyer user ID
        amount: Purchase amount in the smallest currency unit
        status: One of authorized, captured, refunded, voided
        created_at: Creation timestamp
    """

    __tablename__ = "purchases"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="amount_non_negative"),
        CheckConstraint(f"status IN ({_STATUS_LIST})", name="status_valid"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[int] = mapped_column(
        UserIdType,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount: Mapped[int] = mapped_column(MoneyType, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Purchase(id={self.id}, user_id={self.user_id}, "
            f"amount={self.amount}, status={self.status})>"
        )
