"""
User Tasks API - Task endpoints scoped to the authenticated user
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID
import logging

from app.schemas import TaskCreate, TaskUpdate, TaskResponse, MessageResponse
from app.core.dependencies import get_identity, get_task_service
from app.core.exceptions import ForbiddenError
from app.core.policy import Identity
from app.services import TaskService

logger = logging.getLogger(__name__)
router = APIRouter()

def ensure_owner(tasks: TaskService, task_id: UUID, identity: Identity, action: str) -> None:
    """Ownership gate - raises 404 for unknown tasks, 403 for someone else's"""
    if not tasks.is_owned_by(task_id, identity.email):
        logger.warning(f"⚠️  {identity.email} tried to {action} task {task_id} they do not own")
        raise ForbiddenError(f"You don't have permission to {action} this task")

@router.get("/my-tasks", response_model=List[TaskResponse])
def get_own_tasks(
    identity: Identity = Depends(get_identity),
    tasks: TaskService = Depends(get_task_service)
):
    """List the tasks owned by the authenticated user"""
    return tasks.list_by_owner(identity.user_id)

@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_own_task(
    task_data: TaskCreate,
    identity: Identity = Depends(get_identity),
    tasks: TaskService = Depends(get_task_service)
):
    """Create a task owned by the authenticated user"""
    logger.info(f"➡️  Create task request from: {identity.email}")
    return tasks.create(identity.user_id, task_data.title, task_data.description, task_data.status)

@router.put("/{task_id}", response_model=TaskResponse)
def update_own_task(
    task_id: UUID,
    task_data: TaskUpdate,
    identity: Identity = Depends(get_identity),
    tasks: TaskService = Depends(get_task_service)
):
    """
    Replace title, description and status of one of the caller's tasks.

    Raises:
        403: Task belongs to another user
        404: Task not found
    """
    ensure_owner(tasks, task_id, identity, "update")
    return tasks.update(task_id, task_data.title, task_data.description, task_data.status)

@router.delete("/{task_id}", response_model=MessageResponse)
def delete_own_task(
    task_id: UUID,
    identity: Identity = Depends(get_identity),
    tasks: TaskService = Depends(get_task_service)
):
    """
    Delete one of the caller's tasks.

    Raises:
        403: Task belongs to another user
        404: Task not found
    """
    ensure_owner(tasks, task_id, identity, "delete")
    tasks.delete(task_id)
    return MessageResponse(message="Task deleted successfully")
