"""API endpoints for Lesson Notes module."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_db
from src.core.tenants.dependencies import OptionalScope, Scope
from src.modules.lesson_notes.schemas import (
    LessonNoteCreate,
    LessonNoteListResponse,
    LessonNoteResponse,
    LessonNoteUpdate,
)
from src.modules.lesson_notes.service import LessonNoteService, note_to_response
from src.shared.schemas.base import ApiResponse

router = APIRouter(prefix="/lesson-notes", tags=["Lesson Notes"])


@router.post(
    "",
    response_model=ApiResponse[LessonNoteResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_note(
    data: LessonNoteCreate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    """Record what was covered in a lesson."""
    note = await LessonNoteService(db).create_note(scope.tenant_id, data)
    return ApiResponse(message="Lesson note saved successfully", data=note_to_response(note))


@router.get(
    "",
    response_model=ApiResponse[LessonNoteListResponse],
)
async def list_notes(
    scope: OptionalScope,
    search: str | None = Query(None, description="Search by student, topic or subject"),
    student_id: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """Lesson notes, most recent lesson first, with summary counts."""
    view = await LessonNoteService(db).list_view(
        scope.tenant_id if scope else None, search=search, student_id=student_id
    )
    return ApiResponse(data=view)


@router.get(
    "/{note_id}",
    response_model=ApiResponse[LessonNoteResponse],
)
async def get_note(
    note_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    note = await LessonNoteService(db).get_note_by_id(scope.tenant_id, note_id)
    return ApiResponse(data=note_to_response(note))


@router.patch(
    "/{note_id}",
    response_model=ApiResponse[LessonNoteResponse],
)
async def update_note(
    note_id: int,
    data: LessonNoteUpdate,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    note = await LessonNoteService(db).update_note(scope.tenant_id, note_id, data)
    return ApiResponse(message="Lesson note updated successfully", data=note_to_response(note))


@router.delete(
    "/{note_id}",
    response_model=ApiResponse[None],
)
async def delete_note(
    note_id: int,
    scope: Scope,
    db: AsyncSession = Depends(get_db),
):
    await LessonNoteService(db).delete_note(scope.tenant_id, note_id)
    return ApiResponse(message="Lesson note deleted successfully", data=None)
