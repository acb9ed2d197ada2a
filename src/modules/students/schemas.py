"""Schemas for Students module."""

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

# Indonesian mobile numbers: +62 followed by 8-13 digits
INDONESIAN_PHONE_REGEX = re.compile(r"^\+62[0-9]{8,13}$")


def normalize_phone(v: str | None) -> str | None:
    """Normalize 08xx / 628xx / +628xx numbers to +62 form."""
    if v is None or v == "":
        return None

    normalized = v.replace(" ", "").replace("-", "")

    if normalized.startswith("0"):
        normalized = "+62" + normalized[1:]
    elif normalized.startswith("62"):
        normalized = "+" + normalized

    if not INDONESIAN_PHONE_REGEX.match(normalized):
        raise ValueError(
            "Phone must be an Indonesian number: +62XXXXXXXXX (e.g., +6281234567890)"
        )
    return normalized


class StudentCreate(BaseModel):
    """Schema for creating a student."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    subject: str | None = Field(None, max_length=100)
    grade: str | None = Field(None, max_length=50)
    parent_name: str | None = Field(None, max_length=200)
    parent_phone: str | None = Field(None, max_length=50)
    address: str | None = None
    notes: str | None = None
    avatar_url: str | None = Field(None, max_length=500)

    @field_validator("phone", "parent_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return normalize_phone(v)


class StudentUpdate(BaseModel):
    """Schema for updating a student."""

    name: str | None = Field(None, min_length=1, max_length=200)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    subject: str | None = Field(None, max_length=100)
    grade: str | None = Field(None, max_length=50)
    parent_name: str | None = Field(None, max_length=200)
    parent_phone: str | None = Field(None, max_length=50)
    address: str | None = None
    notes: str | None = None
    avatar_url: str | None = Field(None, max_length=500)

    @field_validator("phone", "parent_phone")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return normalize_phone(v)


class StudentResponse(BaseModel):
    """Schema for student response."""

    id: int
    name: str
    email: str | None
    phone: str | None
    subject: str | None
    grade: str | None
    parent_name: str | None
    parent_phone: str | None
    address: str | None
    notes: str | None
    avatar_url: str | None
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
