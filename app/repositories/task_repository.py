"""
Task Repository - Task store queries
"""

from typing import List
from uuid import UUID
from sqlalchemy.orm import Session

from app.models import Task
from app.repositories.base import BaseRepository

class TaskRepository(BaseRepository[Task]):
    def __init__(self, db: Session):
        super().__init__(Task, db)

    def list_all(self) -> List[Task]:
        return self.db.query(Task).order_by(Task.created_at).all()

    def list_by_owner(self, owner_id: UUID) -> List[Task]:
        return (
            self.db.query(Task)
            .filter(Task.owner_id == owner_id)
            .order_by(Task.created_at)
            .all()
        )

    def delete_by_owner(self, owner_id: UUID, commit: bool = True) -> int:
        """Delete every task owned by a user, returning how many were removed"""
        deleted = (
            self.db.query(Task)
            .filter(Task.owner_id == owner_id)
            .delete(synchronize_session="fetch")
        )
        if commit:
            self.commit()
        return deleted
