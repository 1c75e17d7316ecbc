"""
Test configuration and fixtures for the LightBnB data-access layer.
Provides a fresh database per test, repository fixtures and test data factories.
"""

import pytest
import os
import uuid
from datetime import date, timedelta
from typing import AsyncGenerator, Optional
from sqlalchemy.pool import StaticPool

from lightbnb.database import Database
from lightbnb.models.reservation import Reservation
from lightbnb.models.review import PropertyReview
from lightbnb.repositories.property import PropertyRepository
from lightbnb.repositories.reservation import ReservationRepository
from lightbnb.repositories.user import UserRepository
from lightbnb.schemas.property import PropertyCreate, PropertyRecord
from lightbnb.schemas.user import UserCreate, UserRecord


# Test database configuration
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Create a database with an empty schema for a single test."""
    db = Database(TEST_DATABASE_URL, poolclass=StaticPool)
    await db.create_tables()
    try:
        yield db
    finally:
        await db.close()


# Repository fixtures
@pytest.fixture
def user_repository(database: Database) -> UserRepository:
    """Create a user repository instance."""
    return UserRepository(database)


@pytest.fixture
def property_repository(database: Database) -> PropertyRepository:
    """Create a property repository instance."""
    return PropertyRepository(database)


@pytest.fixture
def reservation_repository(database: Database) -> ReservationRepository:
    """Create a reservation repository instance."""
    return ReservationRepository(database)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        name: str = "Test User",
        email: Optional[str] = None,
        password: str = "password"
    ) -> UserCreate:
        """Create user input."""
        return UserCreate(
            name=name,
            email=email or f"test{uuid.uuid4().hex[:8]}@example.com",
            password=password
        )

    @staticmethod
    async def create_user(
        user_repo: UserRepository,
        name: str = "Test User",
        email: Optional[str] = None,
        password: str = "password"
    ) -> UserRecord:
        """Create a test user in the database."""
        return await user_repo.add_user(
            UserFactory.create_user_data(name=name, email=email, password=password)
        )


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        **overrides
    ) -> PropertyCreate:
        """Create property input; cost_per_night is in cents."""
        data = {
            "owner_id": owner_id,
            "title": title,
            "description": "description",
            "thumbnail_photo_url": "https://images.example.com/thumb.jpg",
            "cover_photo_url": "https://images.example.com/cover.jpg",
            "cost_per_night": cost_per_night,
            "parking_spaces": 1,
            "number_of_bathrooms": 1,
            "number_of_bedrooms": 2,
            "country": "Canada",
            "street": "123 Test Street",
            "city": city,
            "province": "British Columbia",
            "post_code": "V5K 0A1",
        }
        data.update(overrides)
        return PropertyCreate(**data)

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        owner_id: int,
        title: str = "Test Property",
        cost_per_night: int = 10000,
        city: str = "Vancouver",
        **overrides
    ) -> PropertyRecord:
        """Create a test property in the database."""
        return await property_repo.add_property(
            PropertyFactory.create_property_data(
                owner_id, title=title, cost_per_night=cost_per_night, city=city, **overrides
            )
        )


class ReservationFactory:
    """Factory for reservations and reviews, which have no create operation of their own."""

    @staticmethod
    async def create_reservation(
        database: Database,
        guest_id: int,
        property_id: int,
        days_ago: int = 30,
        nights: int = 3
    ) -> Reservation:
        """Create a reservation that started ``days_ago`` days before today."""
        start_date = date.today() - timedelta(days=days_ago)
        reservation = Reservation(
            guest_id=guest_id,
            property_id=property_id,
            start_date=start_date,
            end_date=start_date + timedelta(days=nights),
        )
        async with database.session() as session:
            session.add(reservation)
            await session.commit()
            await session.refresh(reservation)
        return reservation

    @staticmethod
    async def create_review(
        database: Database,
        guest_id: int,
        property_id: int,
        rating: int,
        reservation_id: Optional[int] = None
    ) -> PropertyReview:
        """Create a property review."""
        review = PropertyReview(
            guest_id=guest_id,
            property_id=property_id,
            reservation_id=reservation_id,
            rating=rating,
            message="messages",
        )
        async with database.session() as session:
            session.add(review)
            await session.commit()
            await session.refresh(review)
        return review
