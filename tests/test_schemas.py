"""
Tests for input schema validation.
"""

import pytest
from pydantic import ValidationError

from lightbnb.schemas.user import UserCreate


class TestUserCreate:

    def test_email_normalized(self):
        user = UserCreate(name="  Devin Sanders ", email="Devin@Example.com", password="password")

        assert user.name == "Devin Sanders"
        assert user.email == "devin@example.com"

    def test_password_at_bcrypt_limit(self):
        user = UserCreate(name="Test", email="test@example.com", password="a" * 72)

        assert len(user.password) == 72

    def test_password_over_bcrypt_limit(self):
        with pytest.raises(ValidationError):
            UserCreate(name="Test", email="test@example.com", password="a" * 73)

    def test_multibyte_password_over_bcrypt_limit(self):
        # 40 characters, 80 bytes
        with pytest.raises(ValidationError):
            UserCreate(name="Test", email="test@example.com", password="é" * 40)
