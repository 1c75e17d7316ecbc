"""
Pydantic schema for reservation records.
"""

from pydantic import BaseModel, ConfigDict
from datetime import date

from lightbnb.schemas.property import PropertyRecord


class ReservationRecord(BaseModel):
    """A past reservation together with the reserved property and its average rating."""

    id: int
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
    property: PropertyRecord

    model_config = ConfigDict(from_attributes=True)
