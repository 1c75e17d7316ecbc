"""
Property repository for listing creation and filtered property search.
"""

from sqlalchemy.exc import SQLAlchemyError
from lightbnb.database import Database
from lightbnb.models.property import Property
from lightbnb.repositories.base import BaseRepository
from lightbnb.schemas.property import PropertyCreate, PropertyRecord, PropertySearchFilters
from lightbnb.utils.exceptions import QueryExecutionError
from lightbnb.utils.query_builder import build_property_search, compile_query
from typing import Any, List, Optional
import logging

logger = logging.getLogger(__name__)


def to_property_record(property_obj: Property, average_rating: Any = None) -> PropertyRecord:
    """Map a Property row and its aggregated rating to a PropertyRecord."""
    record = PropertyRecord.model_validate(property_obj)
    if average_rating is None:
        return record
    return record.model_copy(update={"average_rating": float(average_rating)})


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.
    Search results carry the property's average review rating.
    """

    def __init__(self, db: Database, default_limit: Optional[int] = None):
        super().__init__(Property, db)
        self.default_limit = db.default_result_limit if default_limit is None else default_limit

    async def get_all_properties(
        self,
        filters: Optional[PropertySearchFilters] = None,
        limit: Optional[int] = None
    ) -> List[PropertyRecord]:
        """
        Search properties.

        Args:
            filters: Optional search criteria (city, owner, price range, rating)
            limit: Maximum number of properties; defaults to the repository default,
                which comes from the database's default_result_limit setting

        Returns:
            Matching properties ordered by cost_per_night ascending; empty when
            nothing matches

        Raises:
            QueryExecutionError: If the query fails
        """
        if limit is None:
            limit = self.default_limit

        query = build_property_search(filters, limit)

        if logger.isEnabledFor(logging.DEBUG):
            compiled = compile_query(query, self.db.dialect)
            logger.debug(f"Property search SQL with {len(compiled.params)} bound parameters: {compiled.sql}")

        async with self.db.session() as session:
            try:
                result = await session.execute(query)
                rows = result.all()
            except SQLAlchemyError as e:
                logger.error(f"Failed to search properties: {e}")
                raise QueryExecutionError("property search", str(e)) from e

        properties = [to_property_record(row[0], row.average_rating) for row in rows]
        logger.debug(f"Property search returned {len(properties)} results")
        return properties

    async def get_property(self, property_id: int) -> Optional[PropertyRecord]:
        """
        Get a single property by id, without its rating.

        Returns:
            PropertyRecord if found, None otherwise
        """
        property_obj = await self.get_by_id(property_id)
        return to_property_record(property_obj) if property_obj else None

    async def add_property(self, property_in: PropertyCreate) -> PropertyRecord:
        """
        Add a property to the database.

        Args:
            property_in: Validated property details; cost_per_night in cents

        Returns:
            The stored property, including its generated id

        Raises:
            QueryExecutionError: If the insert fails (e.g. unknown owner)
        """
        created_property = await self.create(property_in.model_dump())
        logger.info(f"Created property: {created_property.title} (ID: {created_property.id})")
        return to_property_record(created_property)
