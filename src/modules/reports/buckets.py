"""
Calendar bucketing for trend charts and period comparisons.

Buckets are half-open date intervals [start, end): a row dated exactly on a
bucket's start belongs to that bucket, and consecutive buckets share their
boundary so no row is counted twice or lost. Timestamps are reduced to a
local calendar date first; naive datetimes are taken as local wall-clock time.
"""

from bisect import bisect_right
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import StrEnum
from typing import Any, TypeVar
from zoneinfo import ZoneInfo

from src.modules.reports.aggregator import distinct_students, total_revenue
from src.shared.utils.formatting import format_date, month_label

T = TypeVar("T")


class Granularity(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class ReportPeriod(StrEnum):
    """Period selector of the reports view."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


@dataclass(frozen=True)
class Bucket:
    start: date
    end: date  # exclusive
    key: str
    label: str

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


@dataclass
class TrendPoint:
    key: str
    label: str
    start: date
    end: date
    students: int = 0
    sessions: int = 0
    revenue: Decimal = Decimal("0")


def add_months(day: date, months: int) -> date:
    """First day of the month `months` away from the month of `day`."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def week_start(day: date) -> date:
    # Weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _bucket_bounds(granularity: Granularity, anchor: date, offset: int) -> tuple[date, date]:
    if granularity == Granularity.DAY:
        start = anchor + timedelta(days=offset)
        return start, start + timedelta(days=1)
    if granularity == Granularity.WEEK:
        start = week_start(anchor) + timedelta(weeks=offset)
        return start, start + timedelta(weeks=1)
    start = add_months(anchor, offset)
    return start, add_months(start, 1)


def _describe(granularity: Granularity, start: date) -> tuple[str, str]:
    if granularity == Granularity.MONTH:
        return f"{start.year}-{start.month:02d}", month_label(start.year, start.month)
    if granularity == Granularity.WEEK:
        return start.isoformat(), f"Minggu {format_date(start)}"
    return start.isoformat(), format_date(start)


def build_buckets(granularity: Granularity, count: int, today: date) -> list[Bucket]:
    """`count` consecutive buckets, oldest first, the last one containing `today`."""
    buckets: list[Bucket] = []
    if count <= 0:
        return buckets
    for offset in range(-(count - 1), 1):
        start, end = _bucket_bounds(granularity, today, offset)
        key, label = _describe(granularity, start)
        buckets.append(Bucket(start=start, end=end, key=key, label=label))
    return buckets


def month_buckets(count: int, today: date) -> list[Bucket]:
    return build_buckets(Granularity.MONTH, count, today)


def period_range(period: ReportPeriod, today: date) -> tuple[date, date]:
    """Half-open range of the current week, month, quarter or year."""
    if period == ReportPeriod.WEEK:
        start = week_start(today)
        return start, start + timedelta(weeks=1)
    if period == ReportPeriod.MONTH:
        start = date(today.year, today.month, 1)
        return start, add_months(start, 1)
    if period == ReportPeriod.QUARTER:
        start = date(today.year, 3 * ((today.month - 1) // 3) + 1, 1)
        return start, add_months(start, 3)
    return date(today.year, 1, 1), date(today.year + 1, 1, 1)


def previous_period_range(period: ReportPeriod, today: date) -> tuple[date, date]:
    """The period immediately before the current one, same calendar length."""
    start, _ = period_range(period, today)
    return period_range(period, start - timedelta(days=1))


def to_local_date(value: date | datetime | None, tz: ZoneInfo | None = None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None and tz is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def assign_bucket(buckets: Sequence[Bucket], day: date | None) -> int | None:
    """Index of the bucket with start <= day < end, or None outside the series."""
    if day is None or not buckets:
        return None
    index = bisect_right([b.start for b in buckets], day) - 1
    if index < 0 or not buckets[index].contains(day):
        return None
    return index


def partition(
    rows: Iterable[T],
    buckets: Sequence[Bucket],
    key: Callable[[T], Any],
    tz: ZoneInfo | None = None,
) -> list[list[T]]:
    """Split rows into one list per bucket. Rows outside the series are left out."""
    parts: list[list[T]] = [[] for _ in buckets]
    for row in rows:
        index = assign_bucket(buckets, to_local_date(key(row), tz))
        if index is not None:
            parts[index].append(row)
    return parts


def monthly_trend(
    schedules: Iterable,
    payments: Iterable,
    months: int,
    today: date,
    tz: ZoneInfo | None = None,
) -> list[TrendPoint]:
    """
    Per-month students, sessions and paid revenue for the last `months` months.

    Students are the distinct student references among the month's schedules.
    """
    buckets = month_buckets(months, today)
    schedule_parts = partition(schedules, buckets, lambda s: s.start_time, tz)
    payment_parts = partition(payments, buckets, lambda p: p.payment_date, tz)

    return [
        TrendPoint(
            key=bucket.key,
            label=bucket.label,
            start=bucket.start,
            end=bucket.end,
            students=distinct_students(month_schedules),
            sessions=len(month_schedules),
            revenue=total_revenue(month_payments),
        )
        for bucket, month_schedules, month_payments in zip(
            buckets, schedule_parts, payment_parts
        )
    ]


def local_today(tz: ZoneInfo) -> date:
    """Current calendar date in the business timezone."""
    return datetime.now(tz).date()


def day_start(day: date, tz: ZoneInfo) -> datetime:
    """Local midnight of `day` as an aware datetime."""
    return datetime.combine(day, time.min, tzinfo=tz)


def rows_between(
    rows: Iterable[T],
    start: date,
    end: date,
    key: Callable[[T], Any],
    tz: ZoneInfo | None = None,
) -> list[T]:
    """Rows whose local date falls in [start, end)."""
    window = Bucket(start=start, end=end, key=start.isoformat(), label=format_date(start))
    return partition(rows, [window], key, tz)[0]
