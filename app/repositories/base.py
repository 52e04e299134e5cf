"""
Base Repository - Shared session handling for the persistence layer
"""

from typing import Any, Generic, List, Optional, Type, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from app.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)

class BaseRepository(Generic[ModelType]):
    """
    Generic CRUD access for one model, bound to a request-scoped session.

    Write helpers commit by default; pass commit=False to stage several
    changes and commit them together with the last call.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, record_id: Any) -> Optional[ModelType]:
        return self.db.get(self.model, record_id)

    def list_all(self) -> List[ModelType]:
        return self.db.query(self.model).all()

    def add(self, record: ModelType, commit: bool = True) -> ModelType:
        self.db.add(record)
        if commit:
            self.commit()
            self.db.refresh(record)  # Load generated id and defaults
        return record

    def save(self, record: ModelType, commit: bool = True) -> ModelType:
        return self.add(record, commit=commit)

    def delete(self, record: ModelType, commit: bool = True) -> None:
        self.db.delete(record)
        if commit:
            self.commit()

    def commit(self) -> None:
        """Commit the session, rolling back on any database error"""
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Commit failed for {self.model.__name__}: {str(e)}")
            raise
