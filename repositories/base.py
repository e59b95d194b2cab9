"""
Shared plumbing for the SQL repositories.

Each repository is bound to one ORM model and names its primary key column;
lookups by id, per-user queries and bulk deletion are written once here.
"""

from typing import Generic, Iterable, Optional, Type, TypeVar
from uuid import UUID
from sqlalchemy.orm import Query, Session

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType]):
    """Session-bound access to one model keyed by `id_field`"""

    id_field: str = "id"

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def _column(self, name: str):
        return getattr(self.model, name)

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        return self.db.query(self.model).filter(self._column(self.id_field) == entity_id).first()

    def for_user(self, user_id: UUID) -> Query:
        """Query over the rows owned by one user"""
        return self.db.query(self.model).filter(self._column("user_id") == user_id)

    def create(self, entity: ModelType) -> ModelType:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelType) -> ModelType:
        """Commit attribute changes already made on a loaded entity"""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete_many(self, entities: Iterable[ModelType]) -> int:
        """
        Delete entities through the ORM so relationship cascades run.

        Returns:
            Number of rows deleted
        """
        count = 0
        for entity in entities:
            self.db.delete(entity)
            count += 1
        self.db.commit()
        return count
