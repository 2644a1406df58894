from datetime import datetime
from typing import Optional
from pydantic import EmailStr, Field, field_validator

from app.schemas.common import CamelModel, RecordId, blank_to_none, normalize_email


class OrganizerCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)

    @field_validator("phone", mode="before")
    @classmethod
    def empty_phone_to_none(cls, value):
        return blank_to_none(value)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return normalize_email(value)


class OrganizerUpdate(OrganizerCreate):
    id: RecordId


class OrganizerResponse(CamelModel):
    id: int
    name: str
    email: str
    phone: Optional[str]
    created_at: datetime
