"""Schemas for Materials module."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.modules.materials.models import MaterialType


def split_tags(v: Any) -> list[str]:
    """Accept a list or a comma-separated string; blanks are dropped."""
    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    return [str(tag).strip() for tag in v if str(tag).strip()]


class MaterialCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    subject: str | None = Field(None, max_length=100)
    grade_level: str | None = Field(None, max_length=50)
    file_type: MaterialType = MaterialType.DOCUMENT
    file_url: str | None = Field(None, max_length=500)
    file_size: int | None = Field(None, ge=0)
    tags: list[str] = []
    is_public: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> list[str]:
        return split_tags(v)


class MaterialUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    subject: str | None = Field(None, max_length=100)
    grade_level: str | None = Field(None, max_length=50)
    file_type: MaterialType | None = None
    file_url: str | None = Field(None, max_length=500)
    file_size: int | None = Field(None, ge=0)
    tags: list[str] | None = None
    is_public: bool | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: Any) -> list[str] | None:
        return None if v is None else split_tags(v)


class MaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    subject: str | None
    grade_level: str | None
    file_type: str
    file_url: str | None
    file_size: int | None
    tags: list[str]
    is_public: bool
    download_count: int
    created_at: datetime


class MaterialListResponse(BaseModel):
    items: list[MaterialResponse] = []
    total_materials: int = 0
    total_downloads: int = 0
    subjects: list[str] = []
