"""
User Schemas - Pydantic models for request/response validation
"""

from pydantic import BaseModel, validator
import email_validator
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from app.models.user import UserRole
from app.schemas.task import TaskResponse

USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 10
PASSWORD_MIN_LENGTH = 8

def check_username(v: Optional[str]) -> str:
    if v is None or not v.strip():
        raise ValueError("Username is required")
    if not USERNAME_MIN_LENGTH <= len(v) <= USERNAME_MAX_LENGTH:
        raise ValueError(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )
    return v

def check_email(v: Optional[str]) -> str:
    if v is None or not v.strip():
        raise ValueError("Email is required")
    v = v.strip()
    try:
        email_validator.validate_email(v, check_deliverability=False)  # Syntax only, no DNS lookups
    except email_validator.EmailNotValidError:
        raise ValueError("Email must be valid")
    return v

def check_new_password(v: Optional[str]) -> str:
    if v is None or not v.strip():
        raise ValueError("Password is required")
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must have at least {PASSWORD_MIN_LENGTH} characters")
    return v

class UserCreate(BaseModel):
    """Schema for registration and admin provisioning"""
    username: str  # 4-10 characters
    password: str  # Plaintext, at least 8 characters (hashed before storage)
    email: str  # Login identity

    @validator("username")
    def validate_username(cls, v):
        return check_username(v)

    @validator("password")
    def validate_password(cls, v):
        return check_new_password(v)

    @validator("email")
    def validate_email(cls, v):
        return check_email(v)

class UserLogin(BaseModel):
    """Schema for login request"""
    email: str
    password: str

class UserUpdate(BaseModel):
    """Schema for replacing username and email"""
    username: str
    email: str

    @validator("username")
    def validate_username(cls, v):
        return check_username(v)

    @validator("email")
    def validate_email(cls, v):
        return check_email(v)

class PasswordUpdate(BaseModel):
    """Schema for password change - the current password is required"""
    old_password: str
    new_password: str

    @validator("old_password")
    def validate_old_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Old password is required")
        return v

    @validator("new_password")
    def validate_new_password(cls, v):
        return check_new_password(v)

class UserResponse(BaseModel):
    """Schema for user data in responses - excludes password"""
    id: UUID
    username: str
    email: str
    role: UserRole
    created_at: datetime
    tasks: List[TaskResponse] = []

    class Config:
        from_attributes = True  # Build from SQLAlchemy models

class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str  # Signed JWT
    token_type: str = "bearer"
    user: UserResponse

class MessageResponse(BaseModel):
    """Schema for plain confirmation messages"""
    message: str
