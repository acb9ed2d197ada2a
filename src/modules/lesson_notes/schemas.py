"""Schemas for Lesson Notes module."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from src.modules.lesson_notes.models import StudentProgress


class LessonNoteCreate(BaseModel):
    student_id: int | None = None
    subject: str = Field(..., min_length=1, max_length=100)
    topic: str = Field(..., min_length=1, max_length=255)
    content: str | None = None
    lesson_date: date
    duration_minutes: int = Field(90, gt=0, le=600)
    next_topic: str | None = Field(None, max_length=255)
    homework: str | None = None
    student_progress: StudentProgress = StudentProgress.GOOD


class LessonNoteUpdate(BaseModel):
    student_id: int | None = None
    subject: str | None = Field(None, min_length=1, max_length=100)
    topic: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = None
    lesson_date: date | None = None
    duration_minutes: int | None = Field(None, gt=0, le=600)
    next_topic: str | None = Field(None, max_length=255)
    homework: str | None = None
    student_progress: StudentProgress | None = None


class LessonNoteResponse(BaseModel):
    id: int
    student_id: int | None
    student_name: str
    subject: str
    topic: str
    content: str | None
    lesson_date: date
    duration_minutes: int
    next_topic: str | None
    homework: str | None
    student_progress: str
    created_at: datetime


class LessonNoteListResponse(BaseModel):
    """Notes plus the summary cards above the list."""

    items: list[LessonNoteResponse] = []
    total_notes: int = 0
    students_count: int = 0
    average_duration: int = 0
    this_month: int = 0
