"""
Authentication API - Self-registration and login
"""

from fastapi import APIRouter, Depends, status
import logging

from app.schemas import UserCreate, UserLogin, TokenResponse, UserResponse, MessageResponse
from app.models import UserRole
from app.core.security import create_access_token
from app.core.dependencies import get_user_service
from app.services import UserService

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserCreate,  # Validated by Pydantic (username, password, email)
    users: UserService = Depends(get_user_service)
):
    """
    Register a new account.

    Self-registration always creates a USER; administrators are only
    provisioned through the admin API.

    Raises:
        400: Field validation failed (field -> message map)
        409: Username or email already in use
    """
    logger.info(f"➡️  Registration attempt for email: {user_data.email}")

    users.register(
        username=user_data.username,
        password=user_data.password,
        email=user_data.email,
        role=UserRole.USER,
    )

    return MessageResponse(message="User registered successfully")

@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    users: UserService = Depends(get_user_service)
):
    """
    Authenticate with email and password and return a bearer token.

    Raises:
        401: Invalid email or password (never says which)
    """
    logger.info(f"➡️  Login attempt for email: {credentials.email}")

    user = users.authenticate(credentials.email, credentials.password)
    access_token = create_access_token(subject=user.email)  # Email is the token subject

    logger.info(f"✅ Login successful: {user.email}")
    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )
