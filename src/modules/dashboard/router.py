"""API for dashboard summary (main page)."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.core.tenants.dependencies import OptionalScope
from src.modules.dashboard.schemas import DashboardResponse
from src.modules.dashboard.service import DashboardService
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get(
    "",
    response_model=ApiResponse[DashboardResponse],
)
async def get_dashboard(
    scope: OptionalScope,
    db: AsyncSession = Depends(get_db),
):
    """
    Get dashboard summary for main page: active students, today's sessions,
    this month's revenue and recently added students.

    Users without a tenant get the empty summary.
    """
    data = await DashboardService(db).get_summary(scope.tenant_id if scope else None)
    return ApiResponse(data=data)
