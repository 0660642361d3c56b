"""
Balance model.

One running total per user, created by the first credit.
"""

from datetime import UTC, datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from referral_settlement.models.base import Base
from referral_settlement.models.types import MoneyType, UserIdType


class Balance(Base):
    """Balance entity - accumulated referral rewards per user."""

    __tablename__ = "balances"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="balance_non_negative"),
    )

    user_id: Mapped[int] = mapped_column(
        UserIdType,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        autoincrement=False,
    )
    balance: Mapped[int] = mapped_column(
        MoneyType, default=0, nullable=False
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Balance(user_id={self.user_id}, balance={self.balance})>"
