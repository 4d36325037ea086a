from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload
from typing import List
import logging

from ..models.appointment import Appointment, AppointmentStatus
from ..models.user import User
from ..core.exceptions import NotFoundError
from ..core.permissions import (
    check_status_change, ensure_can_list_own_appointments
)
from ..core.security import UserRole
from ..schemas.appointment import AppointmentCreate

logger = logging.getLogger(__name__)

class AppointmentService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(Appointment).options(
            joinedload(Appointment.student),
            joinedload(Appointment.teacher),
        )

    def book(self, student: User, data: AppointmentCreate) -> Appointment:
        """Create a pending appointment between ``student`` and the requested teacher."""
        teacher = self.db.query(User).filter(User.id == data.teacher_id).first()
        if not teacher or teacher.role != UserRole.TEACHER:
            raise NotFoundError("Selected teacher not found or is not a teacher")

        appointment = Appointment(
            student=student,
            teacher=teacher,
            date=data.date,
            time=data.time,
            subject=data.subject,
            status=AppointmentStatus.PENDING,
        )
        self.db.add(appointment)
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(
            f"Student {student.id} booked appointment {appointment.id} with teacher {teacher.id} "
            f"on {appointment.date} {appointment.time}"
        )
        return appointment

    def list_for_user(self, user: User) -> List[Appointment]:
        """Appointments where ``user`` is the student or the teacher, earliest first."""
        ensure_can_list_own_appointments(user.role)

        query = self._query()
        if user.role == UserRole.STUDENT:
            query = query.filter(Appointment.student_id == user.id)
        else:
            query = query.filter(Appointment.teacher_id == user.id)

        return query.order_by(
            Appointment.date.asc(),
            Appointment.time.asc(),
            Appointment.id.asc(),
        ).all()

    def list_all(self) -> List[Appointment]:
        return self._query().order_by(
            Appointment.created_at.desc(),
            Appointment.id.desc(),
        ).all()

    def update_status(self, actor: User, appointment_id: int, requested: AppointmentStatus) -> Appointment:
        appointment = self._query().filter(Appointment.id == appointment_id).first()
        if not appointment:
            raise NotFoundError("Appointment not found")

        current = appointment.status
        try:
            check_status_change(
                actor_id=actor.id,
                actor_role=actor.role,
                student_id=appointment.student_id,
                teacher_id=appointment.teacher_id,
                current=current,
                requested=requested,
            )
        except HTTPException:
            logger.warning(
                f"User {actor.id} ({actor.role.value}) denied status change "
                f"{current.value} -> {requested.value} on appointment {appointment.id}"
            )
            raise

        appointment.status = requested
        self.db.commit()
        self.db.refresh(appointment)

        logger.info(f"Appointment {appointment.id} status {current.value} -> {requested.value} by user {actor.id}")
        return appointment
