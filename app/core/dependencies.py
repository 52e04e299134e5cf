"""
FastAPI Dependencies - Service wiring and the caller's identity
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
import logging

from app.database import get_db
from app.core.exceptions import AuthenticationRequiredError
from app.core.policy import Identity
from app.repositories import TaskRepository, UserRepository
from app.services import TaskService, UserService

logger = logging.getLogger(__name__)

def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Build the user service on the request's session"""
    return UserService(UserRepository(db), TaskRepository(db))

def get_task_service(db: Session = Depends(get_db)) -> TaskService:
    """Build the task service on the request's session"""
    return TaskService(TaskRepository(db), UserRepository(db))

def get_identity(request: Request) -> Identity:
    """
    Identity attached by the auth gateway for this request.

    The gateway already refused anonymous callers on protected routes;
    this guards handlers mounted outside the route policy.

    Usage in endpoints:
        @router.get("/profile")
        def profile(identity: Identity = Depends(get_identity)):
            ...
    """
    identity = getattr(request.state, "identity", None)
    if identity is None:
        logger.warning(f"⚠️  No identity on {request.method} {request.url.path}")
        raise AuthenticationRequiredError("Authentication required")
    return identity
