"""Typed rows handed from the Row Fetcher to the aggregation functions."""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from typing import Any

from pydantic import field_validator

from src.shared.schemas import BaseSchema


class EntityKind(StrEnum):
    """Row sets the fetcher knows how to load."""

    STUDENTS = "students"
    PAYMENTS = "payments"
    SCHEDULES = "schedules"


class StudentRecord(BaseSchema):
    id: int
    name: str
    subject: str | None = None
    is_active: bool = True
    avatar_url: str | None = None
    created_at: datetime | None = None


class PaymentRecord(BaseSchema):
    id: int
    student_id: int | None = None
    student_name: str | None = None
    # Subject of the linked student; None when the student or its subject is missing
    subject: str | None = None
    amount: Decimal | None = None
    payment_date: date | None = None
    status: str | None = None
    method: str | None = None

    @field_validator("amount", mode="before")
    @classmethod
    def drop_unusable_amount(cls, v: Any) -> Any:
        """Non-numeric and non-finite amounts become None; aggregations count them as 0."""
        if v is None:
            return None
        try:
            amount = v if isinstance(v, Decimal) else Decimal(str(v))
        except (InvalidOperation, ValueError):
            return None
        return amount if amount.is_finite() else None


class ScheduleRecord(BaseSchema):
    id: int
    student_id: int | None = None
    student_name: str | None = None
    subject: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: str | None = None
    location: str | None = None
    meeting_type: str | None = None
    meeting_url: str | None = None
