"""Per-user prompt and aspect-ratio drafts"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from adapters import AuthUser
from api.dependencies import get_current_user
from domain.models import get_db_session
from domain.schemas import DraftState
from services.draft_service import DraftService

router = APIRouter(prefix="/drafts", tags=["Drafts"])


@router.get("/me", response_model=DraftState, response_model_by_alias=True)
def get_draft(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return DraftService.load(db, user.id)


@router.put("/me", response_model=DraftState, response_model_by_alias=True)
def save_draft(
    update: DraftState,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Partial update: only the keys present in the body are changed."""
    return DraftService.save(db, user.id, update)


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
def delete_draft(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    DraftService.delete(db, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
