"""
Task Service - Ownership-scoped task CRUD
"""

from typing import List
from uuid import UUID
import logging

from app.core.exceptions import ForbiddenError, NotFoundError
from app.models import Task, TaskStatus, UserRole
from app.repositories import TaskRepository, UserRepository

logger = logging.getLogger(__name__)

class TaskService:
    """
    CRUD over tasks. Every task has exactly one owner.

    Self-service routes must call is_owned_by() before update/delete and
    refuse with ForbiddenError when it returns False.
    """

    def __init__(self, tasks: TaskRepository, users: UserRepository):
        self.tasks = tasks
        self.users = users

    def create(self, owner_id: UUID, title: str, description: str, status: TaskStatus) -> Task:
        """
        Create a task for an existing user.

        Raises:
            NotFoundError: owner does not exist
        """
        owner = self.users.get_by_id(owner_id)
        if owner is None:
            raise NotFoundError(f"User with ID {owner_id} not found")

        task = Task(title=title, description=description, status=status, owner_id=owner.id)
        self.tasks.add(task)
        logger.info(f"✅ Task {task.id} created for user {owner.email}")
        return task

    def create_as_admin(self, owner_id: UUID, title: str, description: str, status: TaskStatus) -> Task:
        """
        Admin-facing creation: administrators cannot own tasks.

        Raises:
            NotFoundError: owner does not exist
            ForbiddenError: owner has the ADMIN role
        """
        owner = self.users.get_by_id(owner_id)
        if owner is None:
            raise NotFoundError(f"User with ID {owner_id} not found")
        if owner.role == UserRole.ADMIN:
            logger.warning(f"⚠️  Refused to create a task for administrator {owner.email}")
            raise ForbiddenError("You can't create a task for an administrator")

        return self.create(owner_id, title, description, status)

    def get_by_id(self, task_id: UUID) -> Task:
        task = self.tasks.get_by_id(task_id)
        if task is None:
            raise NotFoundError(f"Task with ID {task_id} not found")
        return task

    def list_all(self) -> List[Task]:
        return self.tasks.list_all()

    def list_by_owner(self, owner_id: UUID) -> List[Task]:
        return self.tasks.list_by_owner(owner_id)

    def update(self, task_id: UUID, title: str, description: str, status: TaskStatus) -> Task:
        """Full replace of title, description and status"""
        task = self.get_by_id(task_id)

        task.title = title
        task.description = description
        task.status = status

        self.tasks.save(task)
        logger.info(f"✅ Task {task_id} updated")
        return task

    def delete(self, task_id: UUID) -> bool:
        task = self.get_by_id(task_id)
        self.tasks.delete(task)
        logger.info(f"✅ Task {task_id} deleted")
        return True

    def is_owned_by(self, task_id: UUID, user_email: str) -> bool:
        """
        Ownership gate for self-service mutations.

        Raises:
            NotFoundError: task does not exist
        """
        task = self.get_by_id(task_id)
        return task.owner.email == user_email
