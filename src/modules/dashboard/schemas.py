"""Schemas for dashboard API (main page summary)."""

from datetime import datetime
from decimal import Decimal

from src.shared.schemas.base import BaseSchema


class RecentStudent(BaseSchema):
    id: int
    name: str
    subject: str
    avatar_url: str
    # Start of the student's next upcoming session, if any
    next_session: datetime | None = None


class DashboardResponse(BaseSchema):
    """Summary data for main page cards."""

    active_students_count: int = 0
    today_sessions_count: int = 0
    monthly_revenue: Decimal = Decimal("0")
    monthly_revenue_label: str = "Rp 0"
    recent_students: list[RecentStudent] = []
