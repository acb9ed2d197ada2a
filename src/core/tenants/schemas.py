"""Schemas for tenants."""

from datetime import datetime
from typing import Any

from pydantic import Field

from src.shared.schemas import BaseSchema


class TenantCreate(BaseSchema):
    name: str = Field(..., min_length=1, max_length=200)
    domain: str | None = Field(None, max_length=255)
    settings: dict[str, Any] | None = None


class TenantUpdate(BaseSchema):
    name: str | None = Field(None, min_length=1, max_length=200)
    domain: str | None = Field(None, max_length=255)
    settings: dict[str, Any] | None = None


class TenantResponse(BaseSchema):
    id: int
    name: str
    domain: str | None
    is_active: bool
    settings: dict[str, Any] | None
    owner_id: int | None
    created_at: datetime
    role: str | None = None
