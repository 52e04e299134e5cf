"""
Admin API - User management endpoints (admin only)
"""

from fastapi import APIRouter, Depends, status
from typing import List
from uuid import UUID
import logging

from app.schemas import UserCreate, UserResponse, UserUpdate, PasswordUpdate, MessageResponse
from app.models import UserRole
from app.core.dependencies import get_identity, get_user_service
from app.core.exceptions import NotFoundError
from app.core.policy import Identity
from app.services import UserService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/users", response_model=List[UserResponse])
def get_all_users(
    admin: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """Get all users"""
    logger.info(f"➡️  Get all users request from admin: {admin.email}")
    return users.list_all()

@router.get("/user/{user_id}", response_model=UserResponse)
def get_user_by_id(
    user_id: UUID,
    users: UserService = Depends(get_user_service)
):
    """
    Get user by ID.

    Raises:
        404: User not found
    """
    return users.get_by_id(user_id)

@router.post("/user", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    admin: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """Provision a regular (USER) account"""
    logger.info(f"➡️  Admin {admin.email} creating user {user_data.email}")
    users.register(user_data.username, user_data.password, user_data.email, role=UserRole.USER)
    return MessageResponse(message="User created successfully")

@router.post("/admin", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def create_admin(
    user_data: UserCreate,
    admin: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """Provision an administrator - the only path that grants the ADMIN role"""
    logger.info(f"➡️  Admin {admin.email} creating administrator {user_data.email}")
    users.register(user_data.username, user_data.password, user_data.email, role=UserRole.ADMIN)
    return MessageResponse(message="Admin created successfully")

@router.put("/user/{user_id}", response_model=MessageResponse)
def update_user(
    user_id: UUID,
    update: UserUpdate,
    users: UserService = Depends(get_user_service)
):
    """
    Replace a user's username and email.

    Raises:
        404: User not found
        409: Username or email already used by another user
    """
    users.update_username_email(user_id, update.username, update.email)
    return MessageResponse(message="User updated successfully")

@router.put("/user/{user_id}/password", response_model=MessageResponse)
def update_user_password(
    user_id: UUID,
    update: PasswordUpdate,
    users: UserService = Depends(get_user_service)
):
    """
    Change a user's password (the current password is still required).

    Raises:
        400: Current password is incorrect
        404: User not found
    """
    users.update_password(user_id, update.old_password, update.new_password)
    return MessageResponse(message="Password updated successfully")

@router.delete("/user/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: UUID,
    admin: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """
    Delete a user and all of their tasks.

    Raises:
        404: User not found
    """
    logger.info(f"➡️  Admin {admin.email} deleting user {user_id}")
    if not users.delete(user_id):
        raise NotFoundError("User not found")
    return MessageResponse(message="User deleted successfully")
