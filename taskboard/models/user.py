"""User model definitions."""

import uuid
from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from taskboard.database import Base, utcnow


class Role(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"


class User(Base):
    """Represents an application user (student or teacher)."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(320), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String(16), nullable=False)  # student/teacher
    teacher_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    teacher = relationship("User", remote_side=[id], lazy="joined")

    @property
    def is_teacher(self) -> bool:
        return self.role == Role.TEACHER.value
