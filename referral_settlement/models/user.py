"""
User model.

Represents a registered user and their position in the referral forest.
"""

from datetime import UTC, datetime

from sqlalchemy import Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from referral_settlement.models.base import Base
from referral_settlement.models.types import UserIdType


class User(Base):
    """
    User entity.

    The referrer link forms a forest that is not guaranteed to be acyclic,
    so nothing walks it without an explicit depth bound.
    """

    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(
        UserIdType, primary_key=True, autoincrement=False
    )

    # Referral
    referrer_id: Mapped[int | None] = mapped_column(
        UserIdType,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Status flags
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<User(id={self.id}, referrer_id={self.referrer_id}, "
            f"active={self.is_active})>"
        )
