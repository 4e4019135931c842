"""
User repository for account lookups and creation.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, func
from landlord_api.models.user import User, UserRole
from landlord_api.repositories.base import BaseRepository
from landlord_api.utils.exceptions import DuplicateEmailError
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """
    User repository. Users are not owner-scoped: every lookup here happens
    before a caller is authenticated or on behalf of the caller themself.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address, ignoring case.

        Args:
            email: User's email address

        Returns:
            User instance if found, None otherwise
        """
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == normalize_email(email))
        )
        user = result.scalar_one_or_none()

        if user:
            logger.debug(f"Found user by email: {user.email}")
        else:
            logger.debug("User not found by email")

        return user

    async def email_exists(self, email: str) -> bool:
        result = await self.db.execute(
            select(func.count(User.id)).where(func.lower(User.email) == normalize_email(email))
        )
        return (result.scalar() or 0) > 0

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Persist a new user.

        Args:
            user_data: email, password_hash, name and optional role

        Returns:
            Created User instance

        Raises:
            DuplicateEmailError: If the email is already registered, including
                when a concurrent registration wins the unique constraint
        """
        data = dict(user_data)
        data["email"] = normalize_email(data["email"])
        data.setdefault("role", UserRole.USER)

        try:
            user = await self.create(data)
        except IntegrityError:
            raise DuplicateEmailError(data["email"])

        logger.info(f"Created user: {user.email}")
        return user
