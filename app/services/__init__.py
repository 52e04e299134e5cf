"""
Services Package - Business rules for users and tasks
"""

from app.services.user_service import UserService
from app.services.task_service import TaskService

__all__ = ["UserService", "TaskService"]
