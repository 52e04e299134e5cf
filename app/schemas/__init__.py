"""
Schemas Package - Exports all Pydantic schemas
"""

from app.schemas.task import (
    TaskCreate,
    TaskUpdate,
    TaskResponse,
)
from app.schemas.user import (
    UserCreate,
    UserLogin,
    UserUpdate,
    PasswordUpdate,
    UserResponse,
    TokenResponse,
    MessageResponse,
)

# Export all schemas for convenient importing
__all__ = [
    "TaskCreate",
    "TaskUpdate",
    "TaskResponse",
    "UserCreate",
    "UserLogin",
    "UserUpdate",
    "PasswordUpdate",
    "UserResponse",
    "TokenResponse",
    "MessageResponse",
]
