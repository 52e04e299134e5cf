"""
Users API - Self-service profile endpoints for the authenticated user
"""

from fastapi import APIRouter, Depends
import logging

from app.schemas import UserResponse, UserUpdate, PasswordUpdate, MessageResponse
from app.core.dependencies import get_identity, get_user_service
from app.core.exceptions import NotFoundError
from app.core.policy import Identity
from app.services import UserService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/email", response_model=str)
def get_email(identity: Identity = Depends(get_identity)):
    """Return the email of the authenticated user"""
    return identity.email

@router.get("/profile", response_model=UserResponse)
def get_profile(
    identity: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """Return the authenticated user's profile, including owned tasks"""
    logger.debug(f"➡️  Profile request from: {identity.email}")
    return users.get_by_id(identity.user_id)

@router.put("/profile", response_model=MessageResponse)
def update_profile(
    update: UserUpdate,
    identity: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """
    Replace the authenticated user's username and email.

    Note: the current token carries the old email as its subject, so the
    caller must log in again after changing it.

    Raises:
        409: Username or email already used by someone else
    """
    logger.info(f"➡️  Profile update from: {identity.email}")
    users.update_username_email(identity.user_id, update.username, update.email)
    return MessageResponse(message="User updated successfully")

@router.put("/profile/password", response_model=MessageResponse)
def update_password(
    update: PasswordUpdate,
    identity: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """
    Change the authenticated user's password.

    Raises:
        400: Current password is incorrect
    """
    logger.info(f"➡️  Password change from: {identity.email}")
    users.update_password(identity.user_id, update.old_password, update.new_password)
    return MessageResponse(message="Password updated successfully")

@router.delete("/delete", response_model=MessageResponse)
def delete_account(
    identity: Identity = Depends(get_identity),
    users: UserService = Depends(get_user_service)
):
    """Delete the authenticated user together with all of their tasks"""
    logger.info(f"➡️  Account deletion requested by: {identity.email}")
    if not users.delete(identity.user_id):
        raise NotFoundError("User not found")
    return MessageResponse(message="User deleted successfully")
