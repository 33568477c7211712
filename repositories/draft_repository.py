"""
Draft Repository - Data access layer for generation drafts
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Draft


class DraftRepository(BaseRepository[Draft]):
    """Repository for draft data access"""

    def __init__(self, db: Session):
        super().__init__(db, Draft)

    def get_by_id(self, user_id: UUID) -> Optional[Draft]:
        return self.db.query(Draft).filter(Draft.user_id == user_id).first()

    def get_for_update(self, user_id: UUID) -> Optional[Draft]:
        """Row-locked read for read-modify-write (no-op lock on SQLite)"""
        return (
            self.db.query(Draft)
            .filter(Draft.user_id == user_id)
            .with_for_update()
            .first()
        )
