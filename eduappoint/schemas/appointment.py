from pydantic import field_validator
from datetime import date as date_type, datetime
from typing import Optional

from ..models.appointment import AppointmentStatus
from .user import CamelModel, UserSummary, require_text


class AppointmentCreate(CamelModel):
    teacher_id: int
    date: date_type
    time: str
    subject: str

    # Any client-supplied status is ignored; bookings always start pending

    @field_validator("time", "subject")
    @classmethod
    def validate_text(cls, v):
        return require_text(v)


class AppointmentStatusUpdate(CamelModel):
    status: AppointmentStatus


class AppointmentResponse(CamelModel):
    id: int
    student: Optional[UserSummary] = None
    teacher: Optional[UserSummary] = None
    date: date_type
    time: str
    subject: str
    status: AppointmentStatus
    created_at: datetime
    updated_at: datetime


class AppointmentEnvelope(CamelModel):
    message: str
    appointment: AppointmentResponse
