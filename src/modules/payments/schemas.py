"""Schemas for Payments module."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from src.modules.payments.models import PaymentStatus


class PaymentCreate(BaseModel):
    """Schema for recording a payment."""

    student_id: int | None = None
    amount: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    payment_date: date
    due_date: date | None = None
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str | None = Field(None, max_length=50)
    notes: str | None = None


class PaymentUpdate(BaseModel):
    """Schema for updating a payment (e.g. marking it paid)."""

    student_id: int | None = None
    amount: Decimal | None = Field(None, ge=0, max_digits=15, decimal_places=2)
    payment_date: date | None = None
    due_date: date | None = None
    status: PaymentStatus | None = None
    payment_method: str | None = Field(None, max_length=50)
    notes: str | None = None


class PaymentResponse(BaseModel):
    """Payment with the linked student's display fields."""

    id: int
    student_id: int | None
    student_name: str
    subject: str
    amount: Decimal
    payment_date: date
    due_date: date | None
    status: str
    payment_method: str
    notes: str | None
    created_at: datetime


class PaymentSummaryResponse(BaseModel):
    """Totals shown above the payments table."""

    total_revenue: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")
    overdue_amount: Decimal = Decimal("0")
    paid_count: int = 0
    pending_count: int = 0
    overdue_count: int = 0
    transaction_count: int = 0
