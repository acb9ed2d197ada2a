"""
Pure aggregation over already-fetched rows.

Every function takes its row set as an argument, never touches the database
and never raises on empty or partial input: missing amounts count as 0,
missing subjects fall into the sentinel group and an empty schedule set
yields the caller's default duration.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from src.modules.payments.models import PaymentStatus
from src.shared.utils.money import ZERO, to_amount

UNKNOWN_SUBJECT = "Other"
DEFAULT_SESSION_MINUTES = 90


@dataclass
class SubjectStat:
    subject: str
    count: int = 0
    revenue: Decimal = ZERO


def _status_value(status) -> str:
    return status.value if isinstance(status, PaymentStatus) else str(status)


def total_revenue(payments: Iterable) -> Decimal:
    """Sum of amounts over paid payments."""
    return amount_by_status(payments, PaymentStatus.PAID)


def amount_by_status(payments: Iterable, status: PaymentStatus | str) -> Decimal:
    wanted = _status_value(status)
    total = ZERO
    for payment in payments:
        if payment.status == wanted:
            total += to_amount(payment.amount)
    return total


def count_by_status(payments: Iterable, status: PaymentStatus | str) -> int:
    wanted = _status_value(status)
    return sum(1 for payment in payments if payment.status == wanted)


def growth_percent(current, previous) -> float:
    """
    Period-over-period growth in percent, one decimal.

    A previous value of zero (or less) yields 0 rather than infinity.
    """
    current = to_amount(current)
    previous = to_amount(previous)
    if previous <= 0:
        return 0.0
    return round(float((current - previous) / previous * 100), 1)


def subject_key(subject: str | None, unknown_label: str = UNKNOWN_SUBJECT) -> str:
    if subject is None or not str(subject).strip():
        return unknown_label
    return str(subject).strip()


def top_subjects(
    payments: Iterable,
    schedules: Iterable,
    limit: int,
    unknown_label: str = UNKNOWN_SUBJECT,
) -> list[SubjectStat]:
    """
    Rank subjects by paid revenue.

    Revenue comes from paid payments, session count from schedule rows.
    Groups keep first-seen order (payments, then schedules) so equal revenues
    stay in that order after the sort.
    """
    if limit <= 0:
        return []

    groups: dict[str, SubjectStat] = {}

    def group(subject: str | None) -> SubjectStat:
        key = subject_key(subject, unknown_label)
        if key not in groups:
            groups[key] = SubjectStat(subject=key)
        return groups[key]

    for payment in payments:
        stat = group(payment.subject)
        if payment.status == PaymentStatus.PAID.value:
            stat.revenue += to_amount(payment.amount)

    for schedule in schedules:
        group(schedule.subject).count += 1

    ranked = sorted(groups.values(), key=lambda s: s.revenue, reverse=True)
    return ranked[:limit]


def session_minutes(schedule) -> float | None:
    """Length of a session in minutes, or None when it cannot be measured."""
    start, end = schedule.start_time, schedule.end_time
    if start is None or end is None:
        return None
    if (start.tzinfo is None) != (end.tzinfo is None):
        return None
    minutes = (end - start).total_seconds() / 60
    if minutes < 0:
        return None
    return minutes


def average_session_duration(
    schedules: Iterable,
    default_minutes: float = DEFAULT_SESSION_MINUTES,
) -> float:
    """Mean session length in minutes; `default_minutes` when nothing is measurable."""
    durations = [m for m in (session_minutes(s) for s in schedules) if m is not None]
    if not durations:
        return float(default_minutes)
    return round(sum(durations) / len(durations), 1)


def total_hours(schedules: Iterable) -> float:
    minutes = sum(m for m in (session_minutes(s) for s in schedules) if m is not None)
    return round(minutes / 60, 1)


def distinct_students(rows: Iterable) -> int:
    return len({row.student_id for row in rows if row.student_id is not None})
