"""Service for Lesson Notes module."""

from datetime import date
from zoneinfo import ZoneInfo

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config import settings
from src.core.exceptions import NotFoundError
from src.modules.lesson_notes.models import LessonNote
from src.modules.lesson_notes.schemas import (
    LessonNoteCreate,
    LessonNoteListResponse,
    LessonNoteResponse,
    LessonNoteUpdate,
)
from src.modules.reports.buckets import ReportPeriod, local_today, period_range
from src.modules.students.models import Student
from src.modules.students.service import StudentService

UNKNOWN_STUDENT = "Unknown Student"


def note_to_response(note: LessonNote) -> LessonNoteResponse:
    return LessonNoteResponse(
        id=note.id,
        student_id=note.student_id,
        student_name=note.student.name if note.student else UNKNOWN_STUDENT,
        subject=note.subject,
        topic=note.topic,
        content=note.content,
        lesson_date=note.lesson_date,
        duration_minutes=note.duration_minutes,
        next_topic=note.next_topic,
        homework=note.homework,
        student_progress=note.student_progress,
        created_at=note.created_at,
    )


def summarize_notes(notes: list[LessonNote], today: date) -> LessonNoteListResponse:
    """Build the list payload: notes plus count, distinct students, mean duration, notes this month."""
    month_start, month_end = period_range(ReportPeriod.MONTH, today)
    durations = [n.duration_minutes for n in notes if n.duration_minutes is not None]
    return LessonNoteListResponse(
        items=[note_to_response(n) for n in notes],
        total_notes=len(notes),
        students_count=len({n.student_id for n in notes if n.student_id is not None}),
        average_duration=round(sum(durations) / len(durations)) if durations else 0,
        this_month=sum(1 for n in notes if month_start <= n.lesson_date < month_end),
    )


class LessonNoteService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.students = StudentService(db)

    async def create_note(self, tenant_id: int, data: LessonNoteCreate) -> LessonNote:
        await self.students.ensure_active_student(tenant_id, data.student_id)
        note = LessonNote(
            tenant_id=tenant_id,
            **data.model_dump(exclude={"student_progress"}),
            student_progress=data.student_progress.value,
        )
        self.db.add(note)
        await self.db.commit()
        return await self.get_note_by_id(tenant_id, note.id)

    async def get_note_by_id(self, tenant_id: int, note_id: int) -> LessonNote:
        result = await self.db.execute(
            select(LessonNote)
            .where(LessonNote.id == note_id, LessonNote.tenant_id == tenant_id)
            .options(selectinload(LessonNote.student))
            .execution_options(populate_existing=True)
        )
        note = result.scalar_one_or_none()
        if not note:
            raise NotFoundError("Lesson note", note_id)
        return note

    async def list_notes(
        self,
        tenant_id: int,
        search: str | None = None,
        student_id: int | None = None,
    ) -> list[LessonNote]:
        """Notes by lesson date, most recent first. Search matches student, topic or subject."""
        query = (
            select(LessonNote)
            .outerjoin(Student, Student.id == LessonNote.student_id)
            .where(LessonNote.tenant_id == tenant_id)
            .options(selectinload(LessonNote.student))
            .order_by(LessonNote.lesson_date.desc(), LessonNote.id.desc())
        )
        if student_id is not None:
            query = query.where(LessonNote.student_id == student_id)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.where(
                or_(
                    Student.name.ilike(pattern),
                    LessonNote.topic.ilike(pattern),
                    LessonNote.subject.ilike(pattern),
                )
            )
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_view(
        self,
        tenant_id: int | None,
        search: str | None = None,
        student_id: int | None = None,
    ) -> LessonNoteListResponse:
        if tenant_id is None:
            return LessonNoteListResponse()
        notes = await self.list_notes(tenant_id, search=search, student_id=student_id)
        return summarize_notes(notes, local_today(ZoneInfo(settings.timezone)))

    async def update_note(
        self, tenant_id: int, note_id: int, data: LessonNoteUpdate
    ) -> LessonNote:
        note = await self.get_note_by_id(tenant_id, note_id)
        changes = data.model_dump(exclude_unset=True)
        for required in ("subject", "topic", "lesson_date", "duration_minutes", "student_progress"):
            if changes.get(required, "") is None:
                changes.pop(required)
        if "student_id" in changes:
            await self.students.ensure_active_student(tenant_id, changes["student_id"])
        for field, value in changes.items():
            setattr(note, field, value)
        await self.db.commit()
        return await self.get_note_by_id(tenant_id, note_id)

    async def delete_note(self, tenant_id: int, note_id: int) -> None:
        note = await self.get_note_by_id(tenant_id, note_id)
        await self.db.delete(note)
        await self.db.commit()
