"""
Pydantic schemas for user-related request/response validation.
"""

from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel, RecordId, normalize_email


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return normalize_email(value)


class UserUpdate(UserCreate):
    id: RecordId


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    created_at: datetime
