"""Schedule (lesson session) model."""

from datetime import datetime
from enum import StrEnum

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.core.database.base import LocalDateTime, TenantScopedModel


class ScheduleStatus(StrEnum):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class MeetingType(StrEnum):
    OFFLINE = "offline"
    ONLINE = "online"


class Schedule(TenantScopedModel):
    """One tutoring session between start_time and end_time."""

    __tablename__ = "schedules"

    student_id: Mapped[int | None] = mapped_column(
        BigInteger, ForeignKey("students.id"), nullable=True, index=True
    )
    subject: Mapped[str] = mapped_column(String(100), nullable=False)

    start_time: Mapped[datetime] = mapped_column(
        LocalDateTime(), nullable=False, index=True
    )
    end_time: Mapped[datetime] = mapped_column(LocalDateTime(), nullable=False)

    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ScheduleStatus.UPCOMING.value, index=True
    )

    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meeting_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=MeetingType.OFFLINE.value
    )
    meeting_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    student: Mapped["Student | None"] = relationship("Student")

    @property
    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() // 60)


from src.modules.students.models import Student  # noqa: E402
