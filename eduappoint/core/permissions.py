"""
Authorization policy.

Every decision about who may do what lives here as a plain function over
roles, identifiers and statuses, so that the routes and services never
re-implement a rule. A function returns ``None`` when the action is allowed
and raises ``AuthorizationError`` (403) or ``BadRequestError`` (400)
otherwise.
"""
import logging

from .exceptions import AuthorizationError, BadRequestError
from .security import UserRole
from ..models.appointment import AppointmentStatus, TERMINAL_STATUSES

logger = logging.getLogger(__name__)

TEACHER_SETTABLE_STATUSES = frozenset({
    AppointmentStatus.CONFIRMED,
    AppointmentStatus.CANCELLED,
    AppointmentStatus.COMPLETED,
})


def ensure_admin(role: UserRole) -> None:
    if role != UserRole.ADMIN:
        raise AuthorizationError("Not authorized as admin")


def ensure_can_book(role: UserRole) -> None:
    if role != UserRole.STUDENT:
        raise AuthorizationError("Only students can book appointments")


def ensure_can_list_own_appointments(role: UserRole) -> None:
    if role not in (UserRole.STUDENT, UserRole.TEACHER):
        raise AuthorizationError("Invalid role for this operation")


def ensure_can_update_teacher_profile(role: UserRole) -> None:
    if role != UserRole.TEACHER:
        raise AuthorizationError("Only teachers can update teacher profiles")


def check_status_change(
    actor_id: int,
    actor_role: UserRole,
    student_id: int,
    teacher_id: int,
    current: AppointmentStatus,
    requested: AppointmentStatus,
) -> None:
    """Decide whether ``actor`` may move an appointment from ``current`` to ``requested``.

    The terminal lock is checked before any role rule and applies to admins
    as well: a completed or cancelled appointment never changes again.
    """
    is_student = actor_role == UserRole.STUDENT and actor_id == student_id
    is_teacher = actor_role == UserRole.TEACHER and actor_id == teacher_id
    is_admin = actor_role == UserRole.ADMIN

    if not (is_student or is_teacher or is_admin):
        raise AuthorizationError("Not authorized to update this appointment")

    if current in TERMINAL_STATUSES:
        raise BadRequestError("Cannot update a completed or cancelled appointment")

    if is_student:
        if current != AppointmentStatus.PENDING or requested != AppointmentStatus.CANCELLED:
            raise AuthorizationError("Students can only cancel their own pending appointments")
        return

    if is_teacher:
        if requested not in TEACHER_SETTABLE_STATUSES:
            raise BadRequestError("Invalid status update for teacher")
        return

    # admin
    if requested == AppointmentStatus.PENDING:
        raise BadRequestError("An appointment cannot be returned to pending")
    logger.info(f"Admin {actor_id} overriding appointment status {current.value} -> {requested.value}")


def ensure_not_self(sender_id: int, recipient_id: int) -> None:
    if sender_id == recipient_id:
        raise BadRequestError("Cannot send message to yourself.")


def ensure_can_mark_read(actor_id: int, recipient_id: int) -> None:
    if actor_id != recipient_id:
        raise AuthorizationError("Not authorized to mark this message as read.")
