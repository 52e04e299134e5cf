"""
Admin Tasks API - Manage every user's tasks (admin only)
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID
import logging

from app.schemas import TaskCreate, TaskUpdate, TaskResponse, MessageResponse
from app.core.dependencies import get_identity, get_task_service
from app.core.policy import Identity
from app.services import TaskService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("", response_model=List[TaskResponse])
def get_all_tasks(tasks: TaskService = Depends(get_task_service)):
    """List every task"""
    return tasks.list_all()

@router.get("/users/{user_id}/tasks", response_model=List[TaskResponse])
def get_tasks_for_user(
    user_id: UUID,
    tasks: TaskService = Depends(get_task_service)
):
    """List the tasks owned by one user (empty for unknown users)"""
    return tasks.list_by_owner(user_id)

@router.get("/{task_id}", response_model=TaskResponse)
def get_task_by_id(
    task_id: UUID,
    tasks: TaskService = Depends(get_task_service)
):
    """
    Get a task by ID.

    Raises:
        404: Task not found
    """
    return tasks.get_by_id(task_id)

@router.post("/user/{user_id}", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task_for_user(
    user_id: UUID,
    task_data: TaskCreate,
    admin: Identity = Depends(get_identity),
    tasks: TaskService = Depends(get_task_service)
):
    """
    Create a task for a user.

    Raises:
        403: Target user is an administrator
        404: Target user not found
    """
    logger.info(f"➡️  Admin {admin.email} creating task for user {user_id}")
    return tasks.create_as_admin(user_id, task_data.title, task_data.description, task_data.status)

@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: UUID,
    task_data: TaskUpdate,
    tasks: TaskService = Depends(get_task_service)
):
    """
    Replace title, description and status of any task.

    Raises:
        404: Task not found
    """
    return tasks.update(task_id, task_data.title, task_data.description, task_data.status)

@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: UUID,
    admin: Identity = Depends(get_identity),
    tasks: TaskService = Depends(get_task_service)
):
    """
    Delete any task.

    Raises:
        404: Task not found
    """
    logger.info(f"➡️  Admin {admin.email} deleting task {task_id}")
    tasks.delete(task_id)
    return MessageResponse(message="Task deleted successfully")
