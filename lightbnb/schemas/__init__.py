"""
Pydantic schemas for records returned by the repositories and for their inputs.
"""

from lightbnb.schemas.user import UserCreate, UserRecord
from lightbnb.schemas.property import PropertyCreate, PropertyRecord, PropertySearchFilters
from lightbnb.schemas.reservation import ReservationRecord

__all__ = [
    "UserCreate",
    "UserRecord",
    "PropertyCreate",
    "PropertyRecord",
    "PropertySearchFilters",
    "ReservationRecord",
]
