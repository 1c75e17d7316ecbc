"""
Pydantic schemas for user input and records.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt ignores everything past this many bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


class UserCreate(BaseModel):
    """Schema for creating a new user."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Devin Sanders"]
    )

    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["tristanjacobs@gmail.com"]
    )

    password: str = Field(
        ...,
        min_length=1,
        max_length=BCRYPT_MAX_PASSWORD_BYTES,
        description="Plain text password (at most 72 bytes); hashed before it is stored"
    )

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v):
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator('password')
    @classmethod
    def validate_password_length(cls, v):
        """Reject passwords longer than bcrypt can distinguish."""
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password cannot exceed {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v


class UserRecord(BaseModel):
    """A row from the users table."""

    id: int
    name: str
    email: str
    # Kept for login checks, never serialized
    password: str = Field(exclude=True, repr=False)

    model_config = ConfigDict(from_attributes=True)
