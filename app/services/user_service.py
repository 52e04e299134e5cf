"""
User Management Service - Registration, profile changes and account removal
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
import logging

from app.core.exceptions import (
    AuthenticationFailedError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
)
from app.core.security import hash_password, verify_password
from app.models import User, UserRole
from app.repositories import TaskRepository, UserRepository

logger = logging.getLogger(__name__)

class UserService:
    """
    Business rules for user accounts.

    Role assignment is decided by the caller: self-registration always
    registers USER, only the admin provisioning route passes ADMIN.
    Authorization (who may call what) is enforced by the auth gateway,
    not here.
    """

    def __init__(self, users: UserRepository, tasks: TaskRepository):
        self.users = users
        self.tasks = tasks

    # ---- Registration & login -------------------------------------------

    def register(
        self,
        username: str,
        password: str,
        email: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """
        Create a new account.

        Raises:
            ConflictError: username or email already in use (field named)
        """
        logger.info(f"➡️  Registering {role.value} account for email: {email}")
        self._ensure_unique(username=username, email=email)

        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )

        try:
            self.users.add(user)
        except IntegrityError:
            # Lost a race with a concurrent registration - the unique constraint decided
            self._ensure_unique(username=username, email=email)
            raise ConflictError("Username or email is already in use.")

        logger.info(f"✅ User registered successfully: {user.email}")
        return user

    def authenticate(self, email: str, password: str) -> User:
        """
        Check login credentials.

        Raises:
            AuthenticationFailedError: unknown email or wrong password (same message for both)
        """
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning(f"⚠️  Login failed for email: {email}")
            raise AuthenticationFailedError("Invalid email or password")
        return user

    # ---- Lookups ------------------------------------------------------

    def get_by_id(self, user_id: UUID) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with ID {user_id} not found")
        return user

    def get_by_email(self, email: str) -> User:
        user = self.users.get_by_email(email)
        if user is None:
            raise NotFoundError(f"User with email {email} not found")
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self.users.get_by_email(email)

    def list_all(self) -> List[User]:
        return self.users.list_all()

    # ---- Updates ------------------------------------------------------

    def update_username_email(self, user_id: UUID, username: str, email: str) -> User:
        """
        Replace username and email, keeping both unique among other users.

        Raises:
            NotFoundError: no such user
            ConflictError: value already held by a different user
        """
        user = self.get_by_id(user_id)
        self._ensure_unique(username=username, email=email, exclude_id=user.id)

        user.username = username
        user.email = email

        try:
            self.users.save(user)
        except IntegrityError:
            self._ensure_unique(username=username, email=email, exclude_id=user_id)
            raise ConflictError("Username or email is already in use.")

        logger.info(f"✅ User {user_id} updated username/email")
        return user

    def update_password(self, user_id: UUID, old_password: str, new_password: str) -> User:
        """
        Change a password after checking the current one.

        Raises:
            NotFoundError: no such user
            InvalidCredentialsError: old password does not match (hash left unchanged)
        """
        user = self.get_by_id(user_id)

        if not verify_password(old_password, user.password_hash):
            logger.warning(f"⚠️  Password change rejected for user {user_id}: wrong current password")
            raise InvalidCredentialsError("Current password is incorrect.")

        user.password_hash = hash_password(new_password)
        self.users.save(user)
        logger.info(f"✅ Password updated for user {user_id}")
        return user

    # ---- Deletion -----------------------------------------------------

    def delete(self, user_id: UUID) -> bool:
        """
        Delete a user and every task it owns in one transaction.

        Returns:
            False if the user does not exist, True once deleted
        """
        user = self.users.get_by_id(user_id)
        if user is None:
            return False

        removed = self.tasks.delete_by_owner(user.id, commit=False)
        self.users.delete(user)
        logger.info(f"✅ User {user_id} deleted with {removed} task(s)")
        return True

    # ---- Helpers ------------------------------------------------------

    def _ensure_unique(self, username: str, email: str, exclude_id: Optional[UUID] = None) -> None:
        if self.users.exists_by_email(email, exclude_id=exclude_id):
            logger.warning(f"⚠️  Email already in use: {email}")
            raise ConflictError(f"The email {email} is already in use.", field="email")
        if self.users.exists_by_username(username, exclude_id=exclude_id):
            logger.warning(f"⚠️  Username already in use: {username}")
            raise ConflictError(f"The username {username} is already in use.", field="username")
