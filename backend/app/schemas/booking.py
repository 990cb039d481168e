"""
Booking schemas. subject may arrive as "subject" or "message"; totalCost defaults to the teacher's
hourly rate pro-rated over duration (minutes).
"""
from datetime import date as date_type, datetime, time as time_type

from pydantic import Field, model_validator

from app.schemas.base import CamelModel


class BookingCreateRequest(CamelModel):
    teacher_id: int
    date: date_type
    time: time_type
    duration: int = Field(gt=0, description="Session length in minutes")
    subject: str | None = None
    message: str | None = None
    total_cost: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def subject_required(self):
        if not (self.subject or self.message or "").strip():
            raise ValueError("subject (or message) is required")
        return self

    @property
    def session_date(self) -> datetime:
        return datetime.combine(self.date, self.time)

    @property
    def session_subject(self) -> str:
        return (self.subject or self.message or "").strip()


class BookingResponse(CamelModel):
    id: int
    user_id: str
    teacher_id: int
    session_date: datetime
    duration: int
    subject: str
    status: str
    total_amount: int
    created_at: datetime | None = None
