"""
Pydantic schemas for properties: creation input, returned records and
the optional search options understood by property search.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Tuple
from decimal import Decimal, ROUND_HALF_UP

CENTS_PER_UNIT = 100


def to_cents(amount: Decimal) -> int:
    """Convert a price in major currency units to integer cents."""
    cents = Decimal(amount) * CENTS_PER_UNIT
    return int(cents.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PropertyBase(BaseModel):
    """Base property schema with the columns shared by input and records."""

    owner_id: int = Field(..., ge=1, description="ID of the owning user")
    title: str = Field(..., min_length=1, max_length=255, examples=["Speed lamp"])
    description: str = Field("", description="Free-form listing description")
    thumbnail_photo_url: str = Field(..., max_length=255)
    cover_photo_url: str = Field(..., max_length=255)
    cost_per_night: int = Field(..., ge=0, description="Nightly price in cents", examples=[93061])
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)
    country: str = Field(..., max_length=255, examples=["Canada"])
    street: str = Field(..., max_length=255, examples=["536 Namsub Highway"])
    city: str = Field(..., max_length=255, examples=["Sotboske"])
    province: str = Field(..., max_length=255, examples=["Quebec"])
    post_code: str = Field(..., max_length=255, examples=["28142"])


class PropertyCreate(PropertyBase):
    """Schema for creating a new property."""

    @field_validator('title', 'city', 'country', 'street', 'province', 'post_code')
    @classmethod
    def strip_text(cls, v):
        """Strip surrounding whitespace and reject blank values."""
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()


class PropertyRecord(PropertyBase):
    """A property row, optionally augmented with its average review rating."""

    id: int
    active: bool = True
    average_rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

    @property
    def price_per_night(self) -> Decimal:
        """Nightly price in major currency units."""
        return Decimal(self.cost_per_night) / CENTS_PER_UNIT


class PropertySearchFilters(BaseModel):
    """
    Optional property search criteria. Every field may be absent; absent
    fields simply do not contribute a clause.

    Prices are in major currency units. A price filter only applies when both
    the minimum and the maximum are given.
    """

    city: Optional[str] = Field(None, description="Case-insensitive substring of the city")
    owner_id: Optional[int] = Field(None, ge=1)
    minimum_price_per_night: Optional[Decimal] = Field(None, ge=0)
    maximum_price_per_night: Optional[Decimal] = Field(None, ge=0)
    minimum_rating: Optional[float] = Field(None, ge=0, le=5)

    model_config = ConfigDict(extra="ignore")

    @field_validator('city')
    @classmethod
    def blank_city_is_none(cls, v):
        """Treat a blank city as no city filter."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_price_range(self) -> bool:
        """True when both price bounds are given."""
        return self.minimum_price_per_night is not None and self.maximum_price_per_night is not None

    @property
    def has_partial_price_range(self) -> bool:
        """True when exactly one price bound is given."""
        return not self.has_price_range and (
            self.minimum_price_per_night is not None or self.maximum_price_per_night is not None
        )

    def price_range_in_cents(self) -> Optional[Tuple[int, int]]:
        """Return (minimum, maximum) in cents, or None when the range is incomplete."""
        if not self.has_price_range:
            return None
        return to_cents(self.minimum_price_per_night), to_cents(self.maximum_price_per_night)
