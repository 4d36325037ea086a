from sqlalchemy import Column, Integer, String, ForeignKey, JSON
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import relationship

from ..core.database import Base

class TeacherProfile(Base):
    __tablename__ = "teacher_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)

    # Subjects taught, e.g. ["Algebra", "Physics"]
    subjects = Column(MutableList.as_mutable(JSON), nullable=False, default=list)
    # Ordered weekly slots, e.g. [{"day": "Monday", "time": "10:00"}]
    availability = Column(MutableList.as_mutable(JSON), nullable=False, default=list)
    department = Column(String(100), nullable=False, default="")

    # Relationships
    user = relationship("User", back_populates="teacher_profile")

    @classmethod
    def empty(cls) -> "TeacherProfile":
        return cls(subjects=[], availability=[], department="")

    def __repr__(self):
        return f"<TeacherProfile(id={self.id}, user_id={self.user_id}, department='{self.department}')>"
