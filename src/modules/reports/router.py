"""API for reports."""

from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.database.session import get_db
from src.core.pdf import business_info
from src.core.tenants.dependencies import OptionalScope
from src.core.tenants.service import TenantService
from src.modules.reports.buckets import ReportPeriod
from src.modules.reports.exports import ExportFormat, build_payments_export
from src.modules.reports.schemas import ReportResponse
from src.modules.reports.service import ReportsService
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get(
    "/summary",
    response_model=ApiResponse[ReportResponse],
)
async def get_report_summary(
    scope: OptionalScope,
    period: ReportPeriod = Query(ReportPeriod.MONTH, description="week | month | quarter | year"),
    months: int | None = Query(None, ge=0, le=36, description="Trend months (default from settings)"),
    limit: int | None = Query(None, ge=0, le=50, description="Top subjects (default from settings)"),
    db: AsyncSession = Depends(get_db),
):
    """
    Revenue, pending amount, students, sessions, average session length,
    growth vs the previous period, top subjects and the monthly trend.
    """
    report = await ReportsService(db).summary(
        scope.tenant_id if scope else None,
        period=period,
        months=months,
        limit=limit,
    )
    return ApiResponse(data=report)


@router.get("/payments/export")
async def export_payments(
    scope: OptionalScope,
    format: ExportFormat = Query(ExportFormat.CSV, description="csv | xlsx | html | pdf"),
    db: AsyncSession = Depends(get_db),
):
    """Export all payments of the tenant with columns Student, Subject, Amount, Date, Status, Method."""
    tenant_id = scope.tenant_id if scope else None
    rows, summary = await ReportsService(db).payments_export_rows(tenant_id)
    tenant = await TenantService(db).get_tenant(tenant_id) if tenant_id is not None else None
    content, media_type, filename = build_payments_export(
        format,
        rows,
        summary,
        business_info(tenant),
        datetime.now(ZoneInfo(settings.timezone)),
    )
    disposition = "inline" if format == ExportFormat.HTML else "attachment"
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'{disposition}; filename="{filename}"'},
    )
