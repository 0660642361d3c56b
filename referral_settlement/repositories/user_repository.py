"""
User repository.

Data access layer for User model.
"""

from sqlalchemy import Row, select
from sqlalchemy.ext.asyncio import AsyncSession

from referral_settlement.models.user import User
from referral_settlement.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with referral lookups."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_referral_link(self, user_id: int) -> Row | None:
        """
        Read a user's referrer link and activity flag.

        Issues a fresh SELECT instead of consulting the identity map, so the
        values reflect the current transaction's view.

        Args:
            user_id: User ID

        Returns:
            Row with (id, referrer_id, is_active) or None if user not found
        """
        stmt = select(
            User.id, User.referrer_id, User.is_active
        ).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.one_or_none()
