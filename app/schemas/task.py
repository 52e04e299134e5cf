"""
Task Schemas - Pydantic models for task operations
"""

from pydantic import BaseModel, validator
from datetime import datetime
from uuid import UUID

from app.models.task import TaskStatus

# DO NOT import from app.schemas here - causes circular import

class TaskBase(BaseModel):
    """Common task fields - all required, updates replace every field"""
    title: str
    description: str
    status: TaskStatus

class TaskCreate(TaskBase):
    """Schema for creating a task"""

    @validator('title')
    def validate_title(cls, v):
        """Title must not be blank"""
        if not v or not v.strip():
            raise ValueError('Title is required')
        return v.strip()

    @validator('description')
    def validate_description(cls, v):
        """Description must not be blank"""
        if not v or not v.strip():
            raise ValueError('Description is required')
        return v.strip()

class TaskUpdate(TaskCreate):
    """Schema for updating a task - full replace, same rules as creation"""

class TaskResponse(TaskBase):
    """Schema for task data in responses"""
    id: UUID
    owner_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
