"""
Auth Gateway - Per-request authentication and route authorization middleware
"""

from typing import Callable, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool
import logging
import time

from app.core.policy import AccessDecision, Identity, RoutePolicy
from app.core.security import decode_token
from app.repositories import TaskRepository, UserRepository
from app.services import UserService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an 'Authorization: Bearer <token>' header value, else None"""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None

class AuthGateway:
    """
    Runs once per inbound request, before any handler.

    Process:
        1. Public path -> pass through without looking at credentials
        2. Bearer token -> validate, resolve the subject's account
        3. Attach Identity to request.state.identity (None when anonymous)
        4. Apply the route policy -> 401 / 403 / continue

    Token problems never raise here; the caller simply stays anonymous and
    the route policy produces the HTTP status.
    """

    def __init__(self, policy: RoutePolicy, session_factory: sessionmaker):
        self.policy = policy
        self.session_factory = session_factory

    async def __call__(self, request: Request, call_next: Callable):
        path = request.url.path
        request.state.identity = None

        if self.policy.is_public(path):
            return await call_next(request)

        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is not None:
            request.state.identity = await run_in_threadpool(self.resolve_identity, token)

        identity = request.state.identity
        decision = self.policy.evaluate(path, identity)

        if decision == AccessDecision.UNAUTHENTICATED:
            logger.warning(f"⚠️  Unauthenticated {request.method} {path}")
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={
                    "error": "Unauthorized",
                    "detail": "Authentication required",
                    "timestamp": time.time(),
                },
                headers={"WWW-Authenticate": "Bearer"},
            )

        if decision == AccessDecision.FORBIDDEN:
            logger.warning(f"⚠️  {identity.email} ({identity.role.value}) denied {request.method} {path}")
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={
                    "error": "Forbidden",
                    "detail": "You do not have access to this resource",
                    "timestamp": time.time(),
                },
            )

        return await call_next(request)

    def resolve_identity(self, token: str) -> Optional[Identity]:
        """Validate a token and look up its subject; None means anonymous"""
        email = decode_token(token)
        if email is None:
            return None

        db: Session = self.session_factory()
        try:
            users = UserService(UserRepository(db), TaskRepository(db))
            user = users.find_by_email(email)
            if user is None:
                logger.warning(f"⚠️  Token valid but account {email} no longer exists")
                return None
            logger.debug(f"✅ Authenticated {user.email} as {user.role.value}")
            return Identity(user_id=user.id, email=user.email, role=user.role)
        finally:
            db.close()
