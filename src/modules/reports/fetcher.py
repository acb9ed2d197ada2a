"""Tenant-scoped row loading for dashboards and reports."""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.modules.payments.models import Payment
from src.modules.reports.buckets import to_local_date
from src.modules.reports.records import (
    EntityKind,
    PaymentRecord,
    ScheduleRecord,
    StudentRecord,
)
from src.modules.schedules.models import Schedule
from src.modules.students.models import Student

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeRange:
    """Half-open [start, end) range on the kind's timestamp column."""

    start: date | datetime | None = None
    end: date | datetime | None = None


_MODELS = {
    EntityKind.STUDENTS: Student,
    EntityKind.PAYMENTS: Payment,
    EntityKind.SCHEDULES: Schedule,
}

# Column the time range and the default ordering apply to
_TIME_COLUMNS = {
    EntityKind.STUDENTS: "created_at",
    EntityKind.PAYMENTS: "payment_date",
    EntityKind.SCHEDULES: "start_time",
}

_ORDERABLE = {
    EntityKind.STUDENTS: {"created_at", "updated_at"},
    EntityKind.PAYMENTS: {"payment_date", "created_at", "due_date"},
    EntityKind.SCHEDULES: {"start_time", "end_time", "created_at"},
}


class RowFetcher:
    """
    Loads rows of one tenant as typed records.

    Store failures never propagate: they are logged and an empty list is
    returned so the view can show its "no data" state.
    """

    def __init__(self, db: AsyncSession, tz: ZoneInfo | None = None):
        self.db = db
        self.tz = tz or ZoneInfo(settings.timezone)

    def _bound(self, kind: EntityKind, value: date | datetime) -> date | datetime:
        # Payments are dated; other kinds are timestamped
        if kind == EntityKind.PAYMENTS:
            return to_local_date(value, self.tz)
        if isinstance(value, datetime):
            return value
        return datetime.combine(value, time.min, tzinfo=self.tz)

    def _build_query(
        self,
        tenant_id: int,
        kind: EntityKind,
        time_range: TimeRange | None,
        status: str | None,
        order_by: str | None,
        descending: bool,
        include_inactive: bool,
    ):
        model = _MODELS[kind]
        query = select(model).where(model.tenant_id == tenant_id)

        time_column = getattr(model, _TIME_COLUMNS[kind])
        if time_range is not None:
            if time_range.start is not None:
                query = query.where(time_column >= self._bound(kind, time_range.start))
            if time_range.end is not None:
                query = query.where(time_column < self._bound(kind, time_range.end))

        if status is not None and kind != EntityKind.STUDENTS:
            query = query.where(model.status == str(status))
        if kind == EntityKind.STUDENTS and not include_inactive:
            query = query.where(Student.is_active == True)  # noqa: E712

        order_name = order_by or _TIME_COLUMNS[kind]
        if order_name not in _ORDERABLE[kind]:
            raise ValueError(f"Cannot order {kind.value} by {order_name}")
        order_column = getattr(model, order_name)
        query = query.order_by(
            order_column.desc() if descending else order_column.asc(),
            model.id.desc() if descending else model.id.asc(),
        )

        if kind != EntityKind.STUDENTS:
            query = query.add_columns(Student.name, Student.subject).outerjoin(
                Student,
                (Student.id == model.student_id) & (Student.tenant_id == tenant_id),
            )
        return query

    @staticmethod
    def _to_record(kind: EntityKind, row) -> StudentRecord | PaymentRecord | ScheduleRecord:
        if kind == EntityKind.STUDENTS:
            student = row[0]
            return StudentRecord(
                id=student.id,
                name=student.name,
                subject=student.subject,
                is_active=student.is_active,
                avatar_url=student.avatar_url,
                created_at=student.created_at,
            )
        entity, student_name, student_subject = row
        if kind == EntityKind.PAYMENTS:
            return PaymentRecord(
                id=entity.id,
                student_id=entity.student_id,
                student_name=student_name,
                subject=student_subject,
                amount=entity.amount,
                payment_date=entity.payment_date,
                status=entity.status,
                method=entity.payment_method,
            )
        return ScheduleRecord(
            id=entity.id,
            student_id=entity.student_id,
            student_name=student_name,
            subject=entity.subject,
            start_time=entity.start_time,
            end_time=entity.end_time,
            status=entity.status,
            location=entity.location,
            meeting_type=entity.meeting_type,
            meeting_url=entity.meeting_url,
        )

    async def fetch(
        self,
        tenant_id: int,
        kind: EntityKind,
        *,
        time_range: TimeRange | None = None,
        status: str | None = None,
        order_by: str | None = None,
        descending: bool = False,
        include_inactive: bool = False,
        limit: int | None = None,
    ) -> list:
        """
        Rows of `kind` belonging to `tenant_id`, optionally filtered by time range and status.

        Ordering is by one timestamp column (the kind's time column by default).
        Rows that fail validation are skipped with a warning.
        """
        query = self._build_query(
            tenant_id, kind, time_range, status, order_by, descending, include_inactive
        )
        if limit is not None:
            query = query.limit(limit)

        try:
            result = await self.db.execute(query)
            rows = result.all()
        except SQLAlchemyError:
            logger.exception("Fetching %s for tenant %s failed", kind.value, tenant_id)
            await self.db.rollback()
            return []

        records = []
        for row in rows:
            try:
                records.append(self._to_record(kind, row))
            except PydanticValidationError as e:
                logger.warning(
                    "Skipping malformed %s row for tenant %s: %s", kind.value, tenant_id, e
                )
        return records

    async def students(self, tenant_id: int, **kwargs) -> list[StudentRecord]:
        return await self.fetch(tenant_id, EntityKind.STUDENTS, **kwargs)

    async def payments(self, tenant_id: int, **kwargs) -> list[PaymentRecord]:
        return await self.fetch(tenant_id, EntityKind.PAYMENTS, **kwargs)

    async def schedules(self, tenant_id: int, **kwargs) -> list[ScheduleRecord]:
        return await self.fetch(tenant_id, EntityKind.SCHEDULES, **kwargs)
