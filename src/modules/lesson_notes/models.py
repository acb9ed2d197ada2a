"""Lesson note model."""

from datetime import date
from enum import StrEnum

from sqlalchemy import BigInteger, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database.base import TenantScopedModel


class StudentProgress(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    NEEDS_IMPROVEMENT = "needs_improvement"


class LessonNote(TenantScopedModel):
    """What was covered in one lesson and how the student did."""

    __tablename__ = "lesson_notes"

    student_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("students.id"), nullable=True, index=True
    )
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    topic: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    lesson_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=90)
    next_topic: Mapped[str | None] = mapped_column(String(255), nullable=True)
    homework: Mapped[str | None] = mapped_column(Text, nullable=True)
    student_progress: Mapped[str] = mapped_column(
        String(30), nullable=False, default=StudentProgress.GOOD.value
    )

    student: Mapped["Student | None"] = relationship("Student")


from src.modules.students.models import Student  # noqa: E402
