"""API endpoints for Students module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.core.tenants.dependencies import ManagerScope, OptionalScope, Scope
from src.modules.students.schemas import StudentCreate, StudentResponse, StudentUpdate
from src.modules.students.service import StudentService
from src.shared.schemas.base import ApiResponse, PaginatedResponse

router = APIRouter(prefix="/students", tags=["Students"])


@router.post(
    "",
    response_model=ApiResponse[StudentResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_student(
    data: StudentCreate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Create a new student."""
    student = await StudentService(db).create_student(scope.tenant_id, data)
    return ApiResponse(
        message="Student created successfully",
        data=StudentResponse.model_validate(student),
    )


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[StudentResponse]],
)
async def list_students(
    scope: OptionalScope,
    search: str | None = Query(None, description="Search by name, subject or email"),
    include_inactive: bool = Query(False),
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """List students of the current tenant, newest first."""
    if scope is None:
        return ApiResponse(data=PaginatedResponse.empty(page=page, limit=limit))
    students, total = await StudentService(db).list_students(
        scope.tenant_id,
        search=search,
        include_inactive=include_inactive,
        page=page,
        limit=limit,
    )
    return ApiResponse(
        data=PaginatedResponse.create(
            items=[StudentResponse.model_validate(s) for s in students],
            total=total,
            page=page,
            limit=limit,
        )
    )


@router.get(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
)
async def get_student(
    student_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Get student by ID."""
    student = await StudentService(db).get_student_by_id(scope.tenant_id, student_id)
    return ApiResponse(data=StudentResponse.model_validate(student))


@router.patch(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
)
async def update_student(
    student_id: int,
    data: StudentUpdate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Update a student."""
    student = await StudentService(db).update_student(scope.tenant_id, student_id, data)
    return ApiResponse(
        message="Student updated successfully",
        data=StudentResponse.model_validate(student),
    )


@router.delete(
    "/{student_id}",
    response_model=ApiResponse[StudentResponse],
)
async def deactivate_student(
    student_id: int,
    scope: ManagerScope,
    db: AsyncSession = Depends(get_db),
):
    """Deactivate (soft delete) a student. Owner/admin only."""
    student = await StudentService(db).deactivate_student(scope.tenant_id, student_id)
    return ApiResponse(
        message="Student deactivated successfully",
        data=StudentResponse.model_validate(student),
    )
