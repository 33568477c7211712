"""
Profile Repository - Data access layer for user profiles
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Profile


class ProfileRepository(BaseRepository[Profile]):
    """Repository for profile data access"""

    def __init__(self, db: Session):
        super().__init__(db, Profile)

    def get_by_id(self, user_id: UUID) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()
