"""
LightBnB data-access layer.

Async repositories over users, properties, reservations and property reviews.
Create a ``Database`` at startup, pass it to the repositories and close it at
shutdown.
"""

from lightbnb.database import Database
from lightbnb.repositories import PropertyRepository, ReservationRepository, UserRepository
from lightbnb.schemas import (
    PropertyCreate,
    PropertyRecord,
    PropertySearchFilters,
    ReservationRecord,
    UserCreate,
    UserRecord,
)
from lightbnb.utils.exceptions import DataAccessError, QueryExecutionError

__version__ = "1.0.0"

__all__ = [
    "Database",
    "PropertyRepository",
    "ReservationRepository",
    "UserRepository",
    "PropertyCreate",
    "PropertyRecord",
    "PropertySearchFilters",
    "ReservationRecord",
    "UserCreate",
    "UserRecord",
    "DataAccessError",
    "QueryExecutionError",
]
