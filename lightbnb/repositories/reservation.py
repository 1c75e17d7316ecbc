"""
Reservation repository for a guest's reservation history.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from lightbnb.database import Database
from lightbnb.models.property import Property
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.repositories.base import BaseRepository
from lightbnb.repositories.property import to_property_record
from lightbnb.schemas.reservation import ReservationRecord
from lightbnb.utils.exceptions import QueryExecutionError
from lightbnb.utils.query_builder import average_rating, validate_limit
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class ReservationRepository(BaseRepository[Reservation]):
    """Read-only access to reservations."""

    def __init__(self, db: Database):
        super().__init__(Reservation, db)

    async def get_all_reservations(
        self,
        guest_id: int,
        limit: Optional[int] = None
    ) -> List[ReservationRecord]:
        """
        Get a guest's past reservations (end date before today).

        Args:
            guest_id: The id of the user
            limit: Maximum number of reservations; defaults to the database's
                default_result_limit setting

        Returns:
            Reservations ordered by start date, each with the reserved property
            and its average rating; empty when the guest has none

        Raises:
            ValueError: If limit is negative
            QueryExecutionError: If the query fails
        """
        if limit is None:
            limit = self.db.default_result_limit
        validate_limit(limit)

        query = (
            select(Reservation, Property, average_rating().label("average_rating"))
            .join(Property, Reservation.property_id == Property.id)
            .outerjoin(PropertyReview, PropertyReview.property_id == Property.id)
            .where(
                Reservation.guest_id == guest_id,
                Reservation.end_date < func.current_date()
            )
            .group_by(Reservation.id, Property.id)
            .order_by(Reservation.start_date.asc(), Reservation.id.asc())
            .limit(limit)
        )

        async with self.db.session() as session:
            try:
                result = await session.execute(query)
                rows = result.all()
            except SQLAlchemyError as e:
                logger.error(f"Failed to get reservations for guest {guest_id}: {e}")
                raise QueryExecutionError("reservation lookup", str(e)) from e

        reservations = [
            ReservationRecord(
                id=reservation.id,
                guest_id=reservation.guest_id,
                property_id=reservation.property_id,
                start_date=reservation.start_date,
                end_date=reservation.end_date,
                property=to_property_record(property_obj, rating),
            )
            for reservation, property_obj, rating in rows
        ]

        logger.debug(f"Retrieved {len(reservations)} past reservations for guest {guest_id}")
        return reservations
