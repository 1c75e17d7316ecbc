"""
Base repository class with common operations using async SQLAlchemy.
Provides generic insert and lookup operations that specific repositories build on.
"""

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from lightbnb.database import Base, Database
from lightbnb.utils.exceptions import QueryExecutionError
from typing import TypeVar, Generic, Optional, Dict, Any, Type
import logging

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class providing common operations.
    Database failures are logged and re-raised as QueryExecutionError.
    """

    def __init__(self, model: Type[ModelType], db: Database):
        """
        Initialize repository with model class and database.

        Args:
            model: SQLAlchemy model class
            db: Database whose pool every operation draws a connection from
        """
        self.model = model
        self.db = db

    async def create(self, obj_in: Dict[str, Any]) -> ModelType:
        """
        Insert a new record and return it with its generated id.

        Args:
            obj_in: Dictionary of field values for the new record

        Returns:
            Created model instance

        Raises:
            QueryExecutionError: If the insert fails
        """
        async with self.db.session() as session:
            try:
                db_obj = self.model(**obj_in)
                session.add(db_obj)
                await session.commit()
                await session.refresh(db_obj)
                logger.debug(f"Created {self.model.__name__} with id: {db_obj.id}")
                return db_obj
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Failed to create {self.model.__name__}: {e}")
                raise QueryExecutionError(f"create {self.model.__name__}", str(e)) from e

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """
        Get a record by its ID.

        Args:
            id: Primary key of the record to retrieve

        Returns:
            Model instance if found, None otherwise
        """
        return await self.get_by_field("id", id)

    async def get_by_field(self, field: str, value: Any) -> Optional[ModelType]:
        """
        Get the first record (lowest id) with a specific field value.

        Args:
            field: Field name to search by
            value: Value to search for

        Returns:
            Model instance if found, None otherwise

        Raises:
            ValueError: If the model has no such field
            QueryExecutionError: If the query fails
        """
        if not hasattr(self.model, field):
            raise ValueError(f"Field '{field}' does not exist on {self.model.__name__}")

        query = (
            select(self.model)
            .where(getattr(self.model, field) == value)
            .order_by(self.model.id)
            .limit(1)
        )

        async with self.db.session() as session:
            try:
                result = await session.execute(query)
                obj = result.scalars().first()
            except SQLAlchemyError as e:
                logger.error(f"Failed to get {self.model.__name__} by {field}: {e}")
                raise QueryExecutionError(f"get {self.model.__name__} by {field}", str(e)) from e

        if obj:
            logger.debug(f"Retrieved {self.model.__name__} by {field}")
        else:
            logger.debug(f"{self.model.__name__} with {field}={value!r} not found")

        return obj
