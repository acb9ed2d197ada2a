"""Service for reports: aggregate report and payment export rows."""

import logging
from datetime import date
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import Settings, settings as default_settings
from src.modules.payments.models import PaymentStatus
from src.modules.reports import aggregator
from src.modules.reports.buckets import (
    ReportPeriod,
    local_today,
    month_buckets,
    monthly_trend,
    period_range,
    previous_period_range,
    rows_between,
)
from src.modules.reports.fetcher import RowFetcher, TimeRange
from src.modules.reports.records import PaymentRecord
from src.modules.reports.schemas import (
    MonthlyStatResponse,
    PaymentExportRow,
    PaymentExportSummary,
    ReportResponse,
    SubjectStatResponse,
)
from src.shared.utils.formatting import format_currency

logger = logging.getLogger(__name__)

UNKNOWN_STUDENT = "Unknown Student"
UNKNOWN_METHOD = "Unknown"


def _payment_date(p):
    return p.payment_date


def _start_time(s):
    return s.start_time


def _created_at(s):
    return s.created_at


class ReportsService:
    """
    Build the aggregate report of one tenant.

    Rows are fetched once for the window covering the selected period, the
    previous period and the trend months; every figure is then computed in
    memory by the aggregator and the bucketizer.
    """

    def __init__(self, db: AsyncSession, settings: Settings | None = None):
        self.db = db
        self.settings = settings or default_settings
        self.tz = ZoneInfo(self.settings.timezone)

    async def summary(
        self,
        tenant_id: int | None,
        period: ReportPeriod = ReportPeriod.MONTH,
        today: date | None = None,
        months: int | None = None,
        limit: int | None = None,
    ) -> ReportResponse:
        today = today or local_today(self.tz)
        start, end = period_range(period, today)
        if tenant_id is None:
            return ReportResponse(period=period, period_start=start, period_end=end)

        months = self.settings.report_trend_months if months is None else months
        limit = self.settings.top_subjects_limit if limit is None else limit
        prev_start, prev_end = previous_period_range(period, today)
        trend = month_buckets(months, today)

        window = TimeRange(
            start=min([prev_start] + [b.start for b in trend[:1]]),
            end=max([end] + [b.end for b in trend[-1:]]),
        )
        fetcher = RowFetcher(self.db, self.tz)
        payments = await fetcher.payments(tenant_id, time_range=window)
        schedules = await fetcher.schedules(tenant_id, time_range=window)
        students = await fetcher.students(tenant_id, include_inactive=True)

        period_payments = rows_between(payments, start, end, _payment_date, self.tz)
        previous_payments = rows_between(payments, prev_start, prev_end, _payment_date, self.tz)
        period_schedules = rows_between(schedules, start, end, _start_time, self.tz)
        new_students = rows_between(students, start, end, _created_at, self.tz)
        previous_new_students = rows_between(students, prev_start, prev_end, _created_at, self.tz)

        total_revenue = aggregator.total_revenue(period_payments)
        pending_amount = aggregator.amount_by_status(period_payments, PaymentStatus.PENDING)

        logger.debug(
            "Report tenant=%s period=%s [%s, %s): %d payments, %d sessions",
            tenant_id, period.value, start, end, len(period_payments), len(period_schedules),
        )

        return ReportResponse(
            period=period,
            period_start=start,
            period_end=end,
            total_revenue=total_revenue,
            total_revenue_label=format_currency(total_revenue),
            pending_amount=pending_amount,
            pending_amount_label=format_currency(pending_amount),
            total_students=sum(1 for s in students if s.is_active),
            total_sessions=len(period_schedules),
            average_session_duration=aggregator.average_session_duration(
                period_schedules, self.settings.default_session_minutes
            ),
            revenue_growth=aggregator.growth_percent(
                total_revenue, aggregator.total_revenue(previous_payments)
            ),
            student_growth=aggregator.growth_percent(
                len(new_students), len(previous_new_students)
            ),
            top_subjects=[
                SubjectStatResponse(
                    subject=stat.subject,
                    count=stat.count,
                    revenue=stat.revenue,
                    revenue_label=format_currency(stat.revenue),
                )
                for stat in aggregator.top_subjects(
                    period_payments,
                    period_schedules,
                    limit,
                    self.settings.unknown_subject_label,
                )
            ],
            monthly_stats=[
                MonthlyStatResponse(
                    month=point.key,
                    label=point.label,
                    students=point.students,
                    sessions=point.sessions,
                    revenue=point.revenue,
                )
                for point in monthly_trend(schedules, payments, months, today, self.tz)
            ],
        )

    def _export_row(self, payment: PaymentRecord) -> PaymentExportRow:
        return PaymentExportRow(
            student=payment.student_name or UNKNOWN_STUDENT,
            subject=aggregator.subject_key(payment.subject, self.settings.unknown_subject_label),
            amount=payment.amount if payment.amount is not None else 0,
            payment_date=payment.payment_date,
            status=payment.status or "",
            method=payment.method or UNKNOWN_METHOD,
        )

    async def payments_export_rows(
        self, tenant_id: int | None
    ) -> tuple[list[PaymentExportRow], PaymentExportSummary]:
        """All payments of the tenant, newest payment date first, with export totals."""
        if tenant_id is None:
            return [], PaymentExportSummary()
        payments = await RowFetcher(self.db, self.tz).payments(
            tenant_id, order_by="payment_date", descending=True
        )
        summary = PaymentExportSummary(
            total_revenue=aggregator.total_revenue(payments),
            pending_amount=aggregator.amount_by_status(payments, PaymentStatus.PENDING),
            transaction_count=len(payments),
        )
        return [self._export_row(p) for p in payments], summary
