"""Tests for the pure aggregation functions."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from src.modules.reports import aggregator
from src.modules.reports.records import PaymentRecord, ScheduleRecord


def _payment(id: int, amount, status: str = "paid", subject: str | None = "Matematika", student_id=1):
    return PaymentRecord(id=id, amount=amount, status=status, subject=subject, student_id=student_id)


def _schedule(id: int, minutes: int | None = 90, subject: str | None = "Matematika", student_id=1):
    start = datetime(2026, 10, 19, 9, 0)
    end = start + timedelta(minutes=minutes) if minutes is not None else None
    return ScheduleRecord(id=id, subject=subject, start_time=start, end_time=end, student_id=student_id)


class TestTotalRevenue:
    def test_only_paid_counts(self):
        payments = [
            _payment(1, 500000),
            _payment(2, 300000),
            _payment(3, 200000, status="pending"),
            _payment(4, 100000, status="overdue"),
        ]
        assert aggregator.total_revenue(payments) == Decimal("800000")
        assert aggregator.amount_by_status(payments, "pending") == Decimal("200000")
        assert aggregator.count_by_status(payments, "paid") == 2
        assert aggregator.count_by_status(payments, "overdue") == 1

    def test_empty(self):
        assert aggregator.total_revenue([]) == 0

    def test_missing_and_invalid_amounts_count_as_zero(self):
        payments = [
            _payment(1, None),
            _payment(2, "NaN"),
            _payment(3, float("inf")),
            _payment(4, "abc"),
            _payment(5, "150000.50"),
        ]
        assert aggregator.total_revenue(payments) == Decimal("150000.50")


class TestGrowthPercent:
    def test_growth(self):
        assert aggregator.growth_percent(110, 100) == 10
        assert aggregator.growth_percent(50, 100) == -50
        assert aggregator.growth_percent(Decimal("133333"), Decimal("100000")) == 33.3

    def test_zero_previous_yields_zero(self):
        # No previous value means no baseline, reported as 0 rather than infinity
        assert aggregator.growth_percent(500000, 0) == 0
        assert aggregator.growth_percent(0, 0) == 0
        assert aggregator.growth_percent(10, None) == 0


class TestTopSubjects:
    def test_ranking(self):
        payments = [
            _payment(1, 100000, subject="Fisika"),
            _payment(2, 500000, subject="Matematika"),
            _payment(3, 250000, subject="Kimia"),
            _payment(4, 900000, subject="Kimia", status="pending"),
        ]
        schedules = [_schedule(1, subject="Fisika"), _schedule(2, subject="Fisika")]

        result = aggregator.top_subjects(payments, schedules, limit=2)

        assert [s.subject for s in result] == ["Matematika", "Kimia"]
        assert result[0].revenue == Decimal("500000")
        assert result[1].revenue == Decimal("250000")

    def test_counts_sessions_per_subject(self):
        schedules = [_schedule(1, subject="Fisika"), _schedule(2, subject="Fisika"), _schedule(3)]
        result = aggregator.top_subjects([], schedules, limit=5)
        assert {s.subject: s.count for s in result} == {"Fisika": 2, "Matematika": 1}

    def test_missing_subject_goes_to_sentinel(self):
        payments = [_payment(1, 100000, subject=None), _payment(2, 50000, subject="  ")]
        schedules = [_schedule(1, subject=None)]

        result = aggregator.top_subjects(payments, schedules, limit=5)

        assert len(result) == 1
        assert result[0].subject == "Other"
        assert result[0].revenue == Decimal("150000")
        assert result[0].count == 1

    def test_custom_sentinel(self):
        result = aggregator.top_subjects([_payment(1, 1, subject=None)], [], 5, "Unknown")
        assert result[0].subject == "Unknown"

    def test_ties_keep_first_seen_order(self):
        payments = [
            _payment(1, 100000, subject="Kimia"),
            _payment(2, 100000, subject="Biologi"),
            _payment(3, 100000, subject="Fisika"),
        ]
        result = aggregator.top_subjects(payments, [_schedule(1, subject="Sejarah")], limit=10)
        assert [s.subject for s in result] == ["Kimia", "Biologi", "Fisika", "Sejarah"]

    def test_limit(self):
        payments = [_payment(i, i * 1000, subject=f"S{i}") for i in range(1, 8)]
        assert len(aggregator.top_subjects(payments, [], limit=3)) == 3
        assert aggregator.top_subjects(payments, [], limit=0) == []


class TestSessionDuration:
    def test_average(self):
        assert aggregator.average_session_duration([_schedule(1, 60), _schedule(2, 120)]) == 90

    def test_empty_uses_default(self):
        assert aggregator.average_session_duration([]) == 90
        assert aggregator.average_session_duration([], default_minutes=45) == 45

    def test_unmeasurable_sessions_are_skipped(self):
        naive_start = datetime(2026, 10, 19, 9, 0)
        aware_end = datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)
        schedules = [
            _schedule(1, None),
            _schedule(2, 30),
            ScheduleRecord(id=3, start_time=naive_start, end_time=aware_end),
            ScheduleRecord(id=4, start_time=naive_start, end_time=naive_start - timedelta(hours=1)),
        ]
        assert aggregator.average_session_duration(schedules) == 30
        assert aggregator.average_session_duration([_schedule(1, None)], 60) == 60

    def test_total_hours(self):
        assert aggregator.total_hours([_schedule(1, 90), _schedule(2, 60)]) == 2.5
        assert aggregator.total_hours([]) == 0


class TestDistinctStudents:
    def test_distinct(self):
        rows = [_schedule(1, student_id=1), _schedule(2, student_id=1), _schedule(3, student_id=None)]
        assert aggregator.distinct_students(rows) == 1
