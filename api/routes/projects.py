"""Gallery routes: list, delete and favorite generated projects"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID
from typing import List

from adapters import AuthUser, SupabaseAdapter, get_supabase_adapter
from api.dependencies import get_current_user
from domain.models import get_db_session
from domain.schemas import FavoriteResponse, ProjectResponse
from services.project_service import ProjectService

router = APIRouter(prefix="/projects", tags=["Projects"])
logger = logging.getLogger("kuchnie.api.projects")


@router.get("", response_model=List[ProjectResponse])
def list_projects(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
    supabase: SupabaseAdapter = Depends(get_supabase_adapter),
):
    """Caller's projects, newest first, with freshly signed image URLs."""
    return ProjectService.list_projects(db, user.id, supabase)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
    supabase: SupabaseAdapter = Depends(get_supabase_adapter),
):
    ProjectService.delete_project(db, user.id, project_id, supabase)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{project_id}/favorite", response_model=FavoriteResponse)
def toggle_favorite(
    project_id: UUID,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return ProjectService.toggle_favorite(db, user.id, project_id)
