"""API endpoints for Schedules module."""

from datetime import date

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.core.tenants.dependencies import OptionalScope, Scope
from src.modules.schedules.schemas import (
    ScheduleCreate,
    ScheduleDayResponse,
    ScheduleResponse,
    ScheduleStatsResponse,
    ScheduleUpdate,
)
from src.modules.schedules.service import ScheduleService, schedule_to_response
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/schedules", tags=["Schedules"])


@router.post(
    "",
    response_model=ApiResponse[ScheduleResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_schedule(
    data: ScheduleCreate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Schedule a session."""
    service = ScheduleService(db)
    schedule = await service.create_schedule(scope.tenant_id, data)
    return ApiResponse(
        message="Schedule created successfully",
        data=schedule_to_response(schedule, service.tz),
    )


@router.get(
    "",
    response_model=ApiResponse[ScheduleDayResponse],
)
async def list_day_schedules(
    scope: OptionalScope,
    day: date | None = Query(None, alias="date", description="Day to show (default: today)"),
    db: AsyncSession = Depends(get_db),
):
    """Sessions of one day, earliest first."""
    view = await ScheduleService(db).day_view(scope.tenant_id if scope else None, day)
    return ApiResponse(data=view)


@router.get(
    "/stats",
    response_model=ApiResponse[ScheduleStatsResponse],
)
async def schedule_stats(
    scope: OptionalScope,
    db: AsyncSession = Depends(get_db),
):
    """Sessions this week, teaching hours this month and active students."""
    stats = await ScheduleService(db).stats(scope.tenant_id if scope else None)
    return ApiResponse(data=stats)


@router.get(
    "/{schedule_id}",
    response_model=ApiResponse[ScheduleResponse],
)
async def get_schedule(
    schedule_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    service = ScheduleService(db)
    schedule = await service.get_schedule_by_id(scope.tenant_id, schedule_id)
    return ApiResponse(data=schedule_to_response(schedule, service.tz))


@router.patch(
    "/{schedule_id}",
    response_model=ApiResponse[ScheduleResponse],
)
async def update_schedule(
    schedule_id: int,
    data: ScheduleUpdate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    service = ScheduleService(db)
    schedule = await service.update_schedule(scope.tenant_id, schedule_id, data)
    return ApiResponse(
        message="Schedule updated successfully",
        data=schedule_to_response(schedule, service.tz),
    )


@router.delete(
    "/{schedule_id}",
    response_model=ApiResponse[None],
)
async def delete_schedule(
    schedule_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    await ScheduleService(db).delete_schedule(scope.tenant_id, schedule_id)
    return ApiResponse(message="Schedule deleted successfully", data=None)
