"""Schemas for Schedules module."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from src.modules.schedules.models import MeetingType, ScheduleStatus


class ScheduleCreate(BaseModel):
    student_id: int | None = None
    subject: str = Field(..., min_length=1, max_length=100)
    start_time: datetime
    end_time: datetime
    status: ScheduleStatus = ScheduleStatus.UPCOMING
    location: str | None = Field(None, max_length=255)
    meeting_type: MeetingType = MeetingType.OFFLINE
    meeting_url: str | None = Field(None, max_length=500)
    notes: str | None = None

    @model_validator(mode="after")
    def check_times(self) -> "ScheduleCreate":
        if (self.start_time.tzinfo is None) != (self.end_time.tzinfo is None):
            raise ValueError("start_time and end_time must both carry a UTC offset or neither")
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ScheduleUpdate(BaseModel):
    student_id: int | None = None
    subject: str | None = Field(None, min_length=1, max_length=100)
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: ScheduleStatus | None = None
    location: str | None = Field(None, max_length=255)
    meeting_type: MeetingType | None = None
    meeting_url: str | None = Field(None, max_length=500)
    notes: str | None = None


class ScheduleResponse(BaseModel):
    id: int
    student_id: int | None
    student_name: str | None = None
    subject: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int
    status: str
    location: str | None
    meeting_type: str
    meeting_url: str | None
    notes: str | None
    # id-ID clock labels, e.g. "09.00 - 10.30"
    time_label: str = ""


class ScheduleDayResponse(BaseModel):
    day: date
    date_label: str
    items: list[ScheduleResponse]


class ScheduleStatsResponse(BaseModel):
    """Weekly/monthly figures shown beside the calendar."""

    week_sessions: int = 0
    month_hours: float = 0.0
    active_students: int = 0
