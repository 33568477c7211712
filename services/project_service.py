from typing import List
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from adapters import SupabaseAdapter
from app.exceptions import ForbiddenError, KuchnieError, NotFoundError
from domain.models import Project
from domain.schemas import FavoriteResponse, ProjectResponse
from repositories import ProjectRepository

logger = logging.getLogger("kuchnie.projects")


class ProjectService:
    """Gallery of generated projects"""

    @staticmethod
    def _owned_project(db: Session, user_id: UUID, project_id: UUID) -> Project:
        project = ProjectRepository(db).get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        if project.user_id != user_id:
            logger.warning(f"project_access_denied project_id={project_id} user_id={user_id}")
            raise ForbiddenError("Project belongs to another user")
        return project

    @staticmethod
    def list_projects(
        db: Session, user_id: UUID, supabase: SupabaseAdapter
    ) -> List[ProjectResponse]:
        """
        Caller's projects, newest first, each with a fresh signed URL.

        A project whose URL cannot be signed is still listed, with
        ``signed_url`` left empty.
        """
        projects = ProjectRepository(db).get_by_user(user_id)
        responses = []
        for project in projects:
            response = ProjectResponse.model_validate(project)
            try:
                response.signed_url = supabase.create_signed_url(project.image_path)
            except KuchnieError as e:
                logger.warning(
                    f"project_sign_failed project_id={project.project_id} error={e.code}"
                )
            responses.append(response)
        logger.info(f"projects_listed user_id={user_id} count={len(responses)}")
        return responses

    @staticmethod
    def delete_project(
        db: Session, user_id: UUID, project_id: UUID, supabase: SupabaseAdapter
    ) -> None:
        project = ProjectService._owned_project(db, user_id, project_id)
        image_path = project.image_path
        ProjectRepository(db).delete(project_id)

        try:
            supabase.remove_objects([image_path])
        except KuchnieError as e:
            logger.warning(f"project_image_not_removed path={image_path} error={e.code}")

        logger.info(f"project_deleted project_id={project_id} user_id={user_id}")

    @staticmethod
    def toggle_favorite(db: Session, user_id: UUID, project_id: UUID) -> FavoriteResponse:
        project = ProjectService._owned_project(db, user_id, project_id)
        project = ProjectRepository(db).set_favorite(project, not project.favorite)
        logger.info(f"project_favorite project_id={project_id} favorite={project.favorite}")
        return FavoriteResponse(project_id=project.project_id, favorite=project.favorite)
