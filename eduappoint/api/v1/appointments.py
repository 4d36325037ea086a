from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from ...core.database import get_db
from ...api.deps import get_current_user, get_admin_user, get_student_user
from ...services.appointment_service import AppointmentService
from ...schemas.appointment import (
    AppointmentCreate, AppointmentStatusUpdate, AppointmentResponse, AppointmentEnvelope
)
from ...models.user import User

router = APIRouter(prefix="/appointments", tags=["Appointments"])

@router.post("", response_model=AppointmentEnvelope, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    appointment_data: AppointmentCreate,
    current_user: User = Depends(get_student_user),
    db: Session = Depends(get_db)
):
    """Book an appointment with a teacher (students only)."""
    appointment = AppointmentService(db).book(current_user, appointment_data)
    return AppointmentEnvelope(
        message="Appointment booked successfully.",
        appointment=AppointmentResponse.from_orm(appointment),
    )

@router.get("", response_model=List[AppointmentResponse])
async def list_all_appointments(
    current_user: User = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """List every appointment, newest first (admin only)."""
    appointments = AppointmentService(db).list_all()
    return [AppointmentResponse.from_orm(a) for a in appointments]

@router.get("/my", response_model=List[AppointmentResponse])
async def list_my_appointments(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's appointments ordered by date and time."""
    appointments = AppointmentService(db).list_for_user(current_user)
    return [AppointmentResponse.from_orm(a) for a in appointments]

@router.put("/{appointment_id}/status", response_model=AppointmentEnvelope)
async def update_appointment_status(
    appointment_id: int,
    status_data: AppointmentStatusUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Move an appointment to a new status."""
    appointment = AppointmentService(db).update_status(
        current_user, appointment_id, status_data.status
    )
    return AppointmentEnvelope(
        message="Appointment status updated successfully.",
        appointment=AppointmentResponse.from_orm(appointment),
    )
