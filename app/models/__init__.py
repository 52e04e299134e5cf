"""
Models Package - Exports all database models for easy importing
"""

# Import all models to register them with SQLAlchemy Base
# This ensures create_all() knows about all tables
from app.models.user import User, UserRole
from app.models.task import Task, TaskStatus

__all__ = [
    "User",
    "UserRole",
    "Task",
    "TaskStatus",
]
