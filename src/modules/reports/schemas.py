"""Schemas for reports API."""

from datetime import date
from decimal import Decimal

from src.modules.reports.buckets import ReportPeriod
from src.shared.schemas.base import BaseSchema


class SubjectStatResponse(BaseSchema):
    """One row of the top-subjects ranking."""

    subject: str
    count: int  # sessions
    revenue: Decimal
    revenue_label: str


class MonthlyStatResponse(BaseSchema):
    """One month of the trend chart."""

    month: str  # "2026-10"
    label: str  # "Okt 2026"
    students: int
    sessions: int
    revenue: Decimal


class ReportResponse(BaseSchema):
    """Aggregate report for the selected period. Recomputed on every request."""

    period: ReportPeriod = ReportPeriod.MONTH
    period_start: date | None = None
    period_end: date | None = None  # exclusive

    total_revenue: Decimal = Decimal("0")
    total_revenue_label: str = "Rp 0"
    pending_amount: Decimal = Decimal("0")
    pending_amount_label: str = "Rp 0"
    total_students: int = 0
    total_sessions: int = 0
    average_session_duration: float = 0.0  # minutes

    # Percent vs the previous period of the same length; 0 when the previous value is 0
    revenue_growth: float = 0.0
    student_growth: float = 0.0

    top_subjects: list[SubjectStatResponse] = []
    monthly_stats: list[MonthlyStatResponse] = []


class PaymentExportRow(BaseSchema):
    """One exported payment (column order of every export format)."""

    student: str
    subject: str
    amount: Decimal
    payment_date: date | None = None
    status: str
    method: str


class PaymentExportSummary(BaseSchema):
    total_revenue: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")
    transaction_count: int = 0
