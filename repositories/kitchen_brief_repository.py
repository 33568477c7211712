"""
Kitchen Brief Repository - Data access layer for "Moja kuchnia" briefs
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import KitchenBrief


class KitchenBriefRepository(BaseRepository[KitchenBrief]):
    """Repository for kitchen brief data access"""

    def __init__(self, db: Session):
        super().__init__(db, KitchenBrief)

    def get_by_id(self, user_id: UUID) -> Optional[KitchenBrief]:
        return self.db.query(KitchenBrief).filter(KitchenBrief.user_id == user_id).first()

    def get_for_update(self, user_id: UUID) -> Optional[KitchenBrief]:
        return (
            self.db.query(KitchenBrief)
            .filter(KitchenBrief.user_id == user_id)
            .with_for_update()
            .first()
        )
