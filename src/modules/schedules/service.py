"""Service for Schedules module."""

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config import settings
from src.core.exceptions import NotFoundError, ValidationError
from src.modules.reports import aggregator
from src.modules.reports.buckets import (
    ReportPeriod,
    day_start,
    local_today,
    period_range,
)
from src.modules.reports.fetcher import RowFetcher, TimeRange
from src.modules.schedules.models import Schedule
from src.modules.schedules.schemas import (
    ScheduleCreate,
    ScheduleDayResponse,
    ScheduleResponse,
    ScheduleStatsResponse,
    ScheduleUpdate,
)
from src.modules.students.service import StudentService
from src.shared.utils.formatting import format_date_long, format_time

logger = logging.getLogger(__name__)


def _local(value: datetime, tz: ZoneInfo) -> datetime:
    # Naive values are already business-local wall-clock time
    return value.astimezone(tz) if value.tzinfo is not None else value


def _wall_clock(value: datetime, tz: ZoneInfo) -> datetime:
    # Stored values may come back without tzinfo
    return _local(value, tz).replace(tzinfo=None)


def schedule_to_response(schedule: Schedule, tz: ZoneInfo | None = None) -> ScheduleResponse:
    tz = tz or ZoneInfo(settings.timezone)
    start, end = _local(schedule.start_time, tz), _local(schedule.end_time, tz)
    return ScheduleResponse(
        id=schedule.id,
        student_id=schedule.student_id,
        student_name=schedule.student.name if schedule.student else None,
        subject=schedule.subject,
        start_time=schedule.start_time,
        end_time=schedule.end_time,
        duration_minutes=schedule.duration_minutes,
        status=schedule.status,
        location=schedule.location,
        meeting_type=schedule.meeting_type,
        meeting_url=schedule.meeting_url,
        notes=schedule.notes,
        time_label=f"{format_time(start)} - {format_time(end)}",
    )


class ScheduleService:
    """Service for lesson sessions of one tenant."""

    def __init__(self, db: AsyncSession, tz: ZoneInfo | None = None):
        self.db = db
        self.tz = tz or ZoneInfo(settings.timezone)
        self.students = StudentService(db)

    async def create_schedule(self, tenant_id: int, data: ScheduleCreate) -> Schedule:
        await self.students.ensure_active_student(tenant_id, data.student_id)
        schedule = Schedule(
            tenant_id=tenant_id,
            student_id=data.student_id,
            subject=data.subject,
            start_time=data.start_time,
            end_time=data.end_time,
            status=data.status.value,
            location=data.location,
            meeting_type=data.meeting_type.value,
            meeting_url=data.meeting_url,
            notes=data.notes,
        )
        self.db.add(schedule)
        await self.db.commit()
        logger.info("Scheduled session id=%s tenant=%s", schedule.id, tenant_id)
        return await self.get_schedule_by_id(tenant_id, schedule.id)

    async def get_schedule_by_id(self, tenant_id: int, schedule_id: int) -> Schedule:
        result = await self.db.execute(
            select(Schedule)
            .where(Schedule.id == schedule_id, Schedule.tenant_id == tenant_id)
            .options(selectinload(Schedule.student))
            .execution_options(populate_existing=True)
        )
        schedule = result.scalar_one_or_none()
        if not schedule:
            raise NotFoundError("Schedule", schedule_id)
        return schedule

    async def list_for_day(self, tenant_id: int, day: date) -> list[Schedule]:
        """Sessions starting on `day` (business-local), earliest first."""
        start = day_start(day, self.tz)
        end = day_start(day + timedelta(days=1), self.tz)
        result = await self.db.execute(
            select(Schedule)
            .where(
                Schedule.tenant_id == tenant_id,
                Schedule.start_time >= start,
                Schedule.start_time < end,
            )
            .options(selectinload(Schedule.student))
            .order_by(Schedule.start_time.asc(), Schedule.id.asc())
        )
        return list(result.scalars().all())

    async def day_view(self, tenant_id: int | None, day: date | None = None) -> ScheduleDayResponse:
        day = day or local_today(self.tz)
        items = []
        if tenant_id is not None:
            items = [
                schedule_to_response(s, self.tz)
                for s in await self.list_for_day(tenant_id, day)
            ]
        return ScheduleDayResponse(day=day, date_label=format_date_long(day), items=items)

    async def update_schedule(
        self, tenant_id: int, schedule_id: int, data: ScheduleUpdate
    ) -> Schedule:
        schedule = await self.get_schedule_by_id(tenant_id, schedule_id)
        changes = data.model_dump(exclude_unset=True)
        for required in ("subject", "start_time", "end_time", "status", "meeting_type"):
            if changes.get(required, "") is None:
                changes.pop(required)
        if "student_id" in changes:
            await self.students.ensure_active_student(tenant_id, changes["student_id"])

        start = changes.get("start_time", schedule.start_time)
        end = changes.get("end_time", schedule.end_time)
        if _wall_clock(end, self.tz) <= _wall_clock(start, self.tz):
            raise ValidationError("end_time must be after start_time", field="end_time")

        for field, value in changes.items():
            if hasattr(value, "value"):
                value = value.value
            setattr(schedule, field, value)
        await self.db.commit()
        return await self.get_schedule_by_id(tenant_id, schedule_id)

    async def delete_schedule(self, tenant_id: int, schedule_id: int) -> None:
        schedule = await self.get_schedule_by_id(tenant_id, schedule_id)
        await self.db.delete(schedule)
        await self.db.commit()

    async def stats(
        self, tenant_id: int | None, today: date | None = None
    ) -> ScheduleStatsResponse:
        """Sessions this week, hours this month and active students."""
        if tenant_id is None:
            return ScheduleStatsResponse()
        today = today or local_today(self.tz)
        fetcher = RowFetcher(self.db, self.tz)

        week = TimeRange(*period_range(ReportPeriod.WEEK, today))
        month = TimeRange(*period_range(ReportPeriod.MONTH, today))
        week_sessions = await fetcher.schedules(tenant_id, time_range=week)
        month_sessions = await fetcher.schedules(tenant_id, time_range=month)
        students = await fetcher.students(tenant_id)

        return ScheduleStatsResponse(
            week_sessions=len(week_sessions),
            month_hours=aggregator.total_hours(month_sessions),
            active_students=len(students),
        )
