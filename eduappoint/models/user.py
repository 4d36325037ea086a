from sqlalchemy import Column, Integer, String, DateTime, Boolean, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Optional

from ..core.database import Base
from ..core.security import UserRole
from .teacher_profile import TeacherProfile

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.STUDENT)

    # Only meaningful for students; teachers and admins are approved on creation
    is_admin_approved = Column(Boolean, nullable=False, default=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    teacher_profile = relationship(
        "TeacherProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    appointments_as_student = relationship(
        "Appointment",
        foreign_keys="Appointment.student_id",
        back_populates="student",
        cascade="all, delete",
    )
    appointments_as_teacher = relationship(
        "Appointment",
        foreign_keys="Appointment.teacher_id",
        back_populates="teacher",
        cascade="all, delete",
    )
    sent_messages = relationship(
        "Message",
        foreign_keys="Message.sender_id",
        back_populates="sender",
        cascade="all, delete",
    )
    received_messages = relationship(
        "Message",
        foreign_keys="Message.recipient_id",
        back_populates="recipient",
        cascade="all, delete",
    )

    # Per-role constructors
    @classmethod
    def new_student(cls, name: str, email: str, password_hash: str, is_admin_approved: bool = False) -> "User":
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            role=UserRole.STUDENT,
            is_admin_approved=is_admin_approved,
        )

    @classmethod
    def new_teacher(
        cls,
        name: str,
        email: str,
        password_hash: str,
        profile: Optional[TeacherProfile] = None,
    ) -> "User":
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            role=UserRole.TEACHER,
            is_admin_approved=True,
            teacher_profile=profile or TeacherProfile.empty(),
        )

    @classmethod
    def new_admin(cls, name: str, email: str, password_hash: str) -> "User":
        return cls(
            name=name,
            email=email,
            password_hash=password_hash,
            role=UserRole.ADMIN,
            is_admin_approved=True,
        )

    @classmethod
    def for_role(cls, role: UserRole, name: str, email: str, password_hash: str) -> "User":
        """Build a user with the defaults of ``role``."""
        if role == UserRole.TEACHER:
            return cls.new_teacher(name, email, password_hash)
        if role == UserRole.ADMIN:
            return cls.new_admin(name, email, password_hash)
        return cls.new_student(name, email, password_hash)

    def change_role(self, role: UserRole) -> None:
        """Switch role, keeping the teacher profile present iff the role is teacher."""
        if role == self.role:
            return
        self.role = role
        if role == UserRole.TEACHER:
            if self.teacher_profile is None:
                self.teacher_profile = TeacherProfile.empty()
        else:
            self.teacher_profile = None
        if role != UserRole.STUDENT:
            self.is_admin_approved = True

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
