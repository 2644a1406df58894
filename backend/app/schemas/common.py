"""
Shared schema pieces: camelCase wire format, error and delete bodies.
"""

from typing import Annotated, Any, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes as camelCase; accepts either camelCase or snake_case input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


def blank_to_none(value: Any) -> Any:
    """HTML forms submit empty strings for untouched optional inputs."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


# Largest id an INTEGER primary key column can hold
MAX_ID = 2**31 - 1

RecordId = Annotated[int, Field(ge=1, le=MAX_ID)]


def normalize_email(value: str) -> str:
    """Addresses compare case-insensitively, so they are stored lowercased."""
    return value.lower()


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class DeleteResponse(BaseModel):
    message: str
    id: int
