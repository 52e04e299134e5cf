"""
Task Model - Work items, each owned by exactly one user
"""

from sqlalchemy import Column, String, Text, DateTime, Uuid, Enum as SQLEnum, ForeignKey
from sqlalchemy.orm import relationship
import enum
import uuid

from app.database import Base
from app.models.user import utcnow

class TaskStatus(str, enum.Enum):
    """Task status - a flat set, any status may replace any other"""
    PENDING = "PENDING"  # Not started
    IN_PROGRESS = "IN_PROGRESS"  # Currently being worked on
    COMPLETED = "COMPLETED"  # Done

class Task(Base):
    """
    Task table - stores work items and their owner.
    Deleting the owner deletes the task (ON DELETE CASCADE).
    """
    __tablename__ = "tasks"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    status = Column(SQLEnum(TaskStatus), default=TaskStatus.PENDING, nullable=False, index=True)

    # Ownership - required, never null after creation
    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="tasks")

    def __repr__(self):
        return f"<Task {self.id}: {self.title} ({self.status})>"
