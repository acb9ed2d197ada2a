"""Service for dashboard summary (main page)."""

import asyncio
from datetime import date, datetime, timedelta
from urllib.parse import quote
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core.config import settings
from src.modules.dashboard.schemas import DashboardResponse, RecentStudent
from src.modules.payments.models import PaymentStatus
from src.modules.reports import aggregator
from src.modules.reports.buckets import ReportPeriod, local_today, period_range
from src.modules.reports.fetcher import RowFetcher, TimeRange
from src.modules.reports.records import ScheduleRecord, StudentRecord
from src.shared.utils.formatting import format_currency

AVATAR_FALLBACK_URL = "https://api.dicebear.com/7.x/avataaars/svg?seed={seed}"
SUBJECT_PLACEHOLDER = "Mata Pelajaran"


def next_sessions(schedules: list[ScheduleRecord]) -> dict[int, datetime]:
    """First start_time per student; schedules must be ordered by start_time ascending."""
    upcoming: dict[int, datetime] = {}
    for schedule in schedules:
        if schedule.student_id is not None and schedule.start_time is not None:
            upcoming.setdefault(schedule.student_id, schedule.start_time)
    return upcoming


def recent_student_cards(
    students: list[StudentRecord],
    upcoming: dict[int, datetime],
    limit: int,
) -> list[RecentStudent]:
    return [
        RecentStudent(
            id=s.id,
            name=s.name,
            subject=s.subject or SUBJECT_PLACEHOLDER,
            avatar_url=s.avatar_url or AVATAR_FALLBACK_URL.format(seed=quote(s.name)),
            next_session=upcoming.get(s.id),
        )
        for s in students[:limit]
    ]


class DashboardService:
    """Aggregates data for main page cards."""

    def __init__(
        self,
        db: AsyncSession,
        session_factory: async_sessionmaker | None = None,
        tz: ZoneInfo | None = None,
    ):
        self.db = db
        self.tz = tz or ZoneInfo(settings.timezone)
        # One AsyncSession cannot run queries concurrently: each gathered fetch gets its own
        self._session_factory = session_factory or async_sessionmaker(
            db.bind, class_=AsyncSession, expire_on_commit=False
        )

    async def _fetch(self, method: str, tenant_id: int, **kwargs) -> list:
        async with self._session_factory() as session:
            fetcher = RowFetcher(session, self.tz)
            return await getattr(fetcher, method)(tenant_id, **kwargs)

    async def get_summary(
        self, tenant_id: int | None, *, today: date | None = None, now: datetime | None = None
    ) -> DashboardResponse:
        """
        Build dashboard summary.

        Active students, sessions starting today, paid revenue of the current
        month and the most recently added students with their next session.
        A missing tenant yields the empty summary.
        """
        if tenant_id is None:
            return DashboardResponse()

        today = today or local_today(self.tz)
        now = now or datetime.now(self.tz)
        month = TimeRange(*period_range(ReportPeriod.MONTH, today))
        day = TimeRange(today, today + timedelta(days=1))

        # Execute independent queries in parallel using asyncio.gather
        students, today_sessions, month_payments, upcoming = await asyncio.gather(
            self._fetch("students", tenant_id, order_by="created_at", descending=True),
            self._fetch("schedules", tenant_id, time_range=day),
            self._fetch("payments", tenant_id, time_range=month, status=PaymentStatus.PAID),
            self._fetch("schedules", tenant_id, time_range=TimeRange(start=now)),
        )

        limit = settings.recent_students_limit
        monthly_revenue = aggregator.total_revenue(month_payments)

        return DashboardResponse(
            active_students_count=len(students),
            today_sessions_count=len(today_sessions),
            monthly_revenue=monthly_revenue,
            monthly_revenue_label=format_currency(monthly_revenue),
            recent_students=recent_student_cards(
                students, next_sessions(upcoming), limit
            ),
        )
