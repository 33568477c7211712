"""
Project Repository - Data access layer for gallery entries
"""

from typing import Optional, List
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Project


class ProjectRepository(BaseRepository[Project]):
    """Repository for project data access"""

    def __init__(self, db: Session):
        super().__init__(db, Project)

    def get_by_id(self, project_id: UUID) -> Optional[Project]:
        return self.db.query(Project).filter(Project.project_id == project_id).first()

    def get_by_user(self, user_id: UUID, limit: int = 100) -> List[Project]:
        """Projects of a user, newest first"""
        return (
            self.db.query(Project)
            .filter(Project.user_id == user_id)
            .order_by(Project.created_at.desc(), Project.project_id)
            .limit(limit)
            .all()
        )

    def set_favorite(self, project: Project, favorite: bool) -> Project:
        project.favorite = favorite
        return self.update(project)
