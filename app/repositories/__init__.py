"""
Repositories Package - Persistence access for users and tasks
"""

from app.repositories.user_repository import UserRepository
from app.repositories.task_repository import TaskRepository

__all__ = ["UserRepository", "TaskRepository"]
