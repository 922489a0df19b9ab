"""Task model definitions."""

import uuid
from enum import Enum

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from taskboard.database import Base, utcnow


class Progress(str, Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Task(Base):
    """Represents a task owned by a single user."""
    __tablename__ = "tasks"
    __table_args__ = (Index("idx_tasks_user_created", "user_id", "created_at"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    due_date = Column(Date, nullable=True)
    progress = Column(String(16), nullable=False, default=Progress.NOT_STARTED.value)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", lazy="joined")
