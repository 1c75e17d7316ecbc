"""
User repository for lookups, registration and login checks.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from lightbnb.database import Database
from lightbnb.models.user import User
from lightbnb.repositories.base import BaseRepository
from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.utils.exceptions import QueryExecutionError
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """Repository for user accounts."""

    def __init__(self, db: Database):
        super().__init__(User, db)

    async def _get_by_email(self, email: str) -> Optional[User]:
        """First user (lowest id) whose stored email matches, ignoring case."""
        normalized_email = email.lower().strip()
        query = (
            select(User)
            .where(func.lower(User.email) == normalized_email)
            .order_by(User.id)
            .limit(1)
        )

        async with self.db.session() as session:
            try:
                result = await session.execute(query)
                return result.scalars().first()
            except SQLAlchemyError as e:
                logger.error(f"Failed to get user by email {email}: {e}")
                raise QueryExecutionError("get User by email", str(e)) from e

    async def get_user_with_email(self, email: str) -> Optional[UserRecord]:
        """
        Get a single user given their email.

        Args:
            email: Email address to search for; matched case-insensitively

        Returns:
            UserRecord if found, None otherwise
        """
        user = await self._get_by_email(email)
        return UserRecord.model_validate(user) if user else None

    async def get_user_with_id(self, user_id: int) -> Optional[UserRecord]:
        """
        Get a single user given their id.

        Returns:
            UserRecord if found, None otherwise
        """
        user = await self.get_by_id(user_id)
        return UserRecord.model_validate(user) if user else None

    async def add_user(self, user_in: UserCreate) -> UserRecord:
        """
        Add a new user. The plain password is hashed before it is stored.

        Args:
            user_in: Validated user details

        Returns:
            The stored user, including its generated id

        Raises:
            QueryExecutionError: If the insert fails
        """
        create_data = {
            "name": user_in.name,
            "email": user_in.email,
            "password": User.hash_password(user_in.password),
        }

        user = await self.create(create_data)
        logger.info(f"Created user: {user.email} (ID: {user.id})")
        return UserRecord.model_validate(user)

    async def authenticate_user(self, email: str, password: str) -> Optional[UserRecord]:
        """
        Check login credentials.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            UserRecord if the credentials match, None otherwise
        """
        user = await self._get_by_email(email)

        if not user:
            logger.debug(f"Authentication failed: user {email} not found")
            return None

        if not user.verify_password(password):
            logger.debug(f"Authentication failed: invalid password for {email}")
            return None

        logger.info(f"User authenticated successfully: {email}")
        return UserRecord.model_validate(user)
