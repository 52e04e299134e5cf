"""
User Model - Represents authenticated users in the system
"""

from sqlalchemy import Column, String, DateTime, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid
import enum

from app.database import Base

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class UserRole(str, enum.Enum):
    """User role enumeration - defines permission levels"""
    USER = "USER"  # Regular user - manages own profile and tasks
    ADMIN = "ADMIN"  # Admin user - manages all users and tasks

class User(Base):
    """
    User table - stores authentication and profile information.
    The email is the login identity and the subject of issued tokens.
    """
    __tablename__ = "users"

    # Primary key - opaque, assigned at creation
    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    # Identity fields - both unique at the storage level
    username = Column(String(10), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)

    password_hash = Column(String(255), nullable=False)  # bcrypt hash (never exposed)

    # Authorization
    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Owned tasks - back-reference only; the user service deletes them explicitly
    # and the foreign key cascades, so the ORM never nulls out owner_id
    tasks = relationship(
        "Task",
        back_populates="owner",
        passive_deletes="all",
        order_by="Task.created_at",
    )

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
