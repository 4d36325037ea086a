from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from ..models.user import User
from ..models.teacher_profile import TeacherProfile
from ..core.exceptions import BadRequestError, ConflictError, NotFoundError
from ..core.security import UserRole, get_password_hash
from ..schemas.user import (
    AdminUserCreate, AdminUserUpdate, TeacherProfileFields, TeacherProfileUpdate
)

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, db: Session):
        self.db = db

    # Teachers (public)
    def list_teachers(self) -> List[User]:
        return self.db.query(User).filter(User.role == UserRole.TEACHER).order_by(User.id).all()

    def get_teacher(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user or user.role != UserRole.TEACHER:
            raise NotFoundError("Teacher not found")
        return user

    def update_teacher_profile(self, current_user: User, data: TeacherProfileUpdate) -> User:
        """Apply the supplied fields to the caller's own teacher profile."""
        if data.name is not None:
            current_user.name = data.name
        if data.email is not None and data.email != current_user.email:
            self._ensure_email_free(data.email)
            current_user.email = data.email

        if current_user.teacher_profile is None:
            current_user.teacher_profile = TeacherProfile.empty()
        self._apply_profile_fields(current_user.teacher_profile, data)

        self._commit()
        self.db.refresh(current_user)
        logger.info(f"Teacher {current_user.id} updated their profile")
        return current_user

    # Admin
    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def create_user(self, actor: User, data: AdminUserCreate) -> User:
        self._check_role_fields(data.role, data.is_admin_approved, data.teacher_profile)
        self._ensure_email_free(data.email)

        password_hash = get_password_hash(data.password)
        if data.role == UserRole.TEACHER:
            profile = TeacherProfile.empty()
            if data.teacher_profile is not None:
                self._apply_profile_fields(profile, data.teacher_profile)
            user = User.new_teacher(data.name, data.email, password_hash, profile=profile)
        elif data.role == UserRole.ADMIN:
            user = User.new_admin(data.name, data.email, password_hash)
        else:
            user = User.new_student(
                data.name,
                data.email,
                password_hash,
                is_admin_approved=bool(data.is_admin_approved),
            )

        self.db.add(user)
        self._commit()
        self.db.refresh(user)
        logger.info(f"Admin {actor.id} created {user.role.value} account {user.email} (id={user.id})")
        return user

    def update_user(self, actor: User, user_id: int, data: AdminUserUpdate) -> User:
        """Apply a partial update; approval and profile fields must fit the resulting role."""
        user = self._get_user(user_id)
        self._check_role_fields(data.role or user.role, data.is_admin_approved, data.teacher_profile)

        if data.name is not None:
            user.name = data.name
        if data.email is not None and data.email != user.email:
            self._ensure_email_free(data.email)
            user.email = data.email
        if data.password is not None:
            user.password_hash = get_password_hash(data.password)
        if data.role is not None:
            user.change_role(data.role)
        if data.is_admin_approved is not None:
            user.is_admin_approved = data.is_admin_approved
        if data.teacher_profile is not None:
            self._apply_profile_fields(user.teacher_profile, data.teacher_profile)

        self._commit()
        self.db.refresh(user)
        if data.password is not None:
            logger.warning(f"Admin {actor.id} reset the password of user {user.id}")
        logger.info(f"Admin {actor.id} updated user {user.id}")
        return user

    def delete_user(self, actor: User, user_id: int) -> None:
        user = self._get_user(user_id)
        email = user.email
        self.db.delete(user)
        self._commit()
        logger.warning(f"Admin {actor.id} deleted user {user_id} ({email})")

    # Helpers
    def _get_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")
        return user

    def _ensure_email_free(self, email: str) -> None:
        if self.db.query(User).filter(User.email == email).first():
            raise ConflictError("User with this email already exists")

    @staticmethod
    def _check_role_fields(
        role: UserRole,
        is_admin_approved: Optional[bool],
        teacher_profile: Optional[TeacherProfileFields],
    ) -> None:
        if is_admin_approved is not None and role != UserRole.STUDENT:
            raise BadRequestError("isAdminApproved applies only to students; teachers and admins are always approved")
        if teacher_profile is not None and role != UserRole.TEACHER:
            raise BadRequestError("teacherProfile applies only to teachers")

    @staticmethod
    def _apply_profile_fields(profile: TeacherProfile, data: TeacherProfileFields) -> None:
        if data.subjects is not None:
            profile.subjects = list(data.subjects)
        if data.availability is not None:
            profile.availability = [slot.model_dump() for slot in data.availability]
        if data.department is not None:
            profile.department = data.department

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("User with this email already exists")
