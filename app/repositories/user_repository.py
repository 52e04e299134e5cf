"""
User Repository - Credential store lookups and existence checks
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from app.models import User
from app.repositories.base import BaseRepository

class UserRepository(BaseRepository[User]):
    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def exists_by_email(self, email: str, exclude_id: Optional[UUID] = None) -> bool:
        """True if another user already holds this email"""
        query = self.db.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def exists_by_username(self, username: str, exclude_id: Optional[UUID] = None) -> bool:
        """True if another user already holds this username"""
        query = self.db.query(User.id).filter(User.username == username)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def list_all(self):
        return self.db.query(User).order_by(User.created_at).all()
