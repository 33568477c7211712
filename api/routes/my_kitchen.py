"""'Moja kuchnia' brief of the authenticated user"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from adapters import AuthUser
from api.dependencies import get_current_user
from domain.models import get_db_session
from domain.schemas import (
    BriefCategoryResponse,
    BriefNotesRequest,
    BriefSketchRequest,
    BriefToggleRequest,
    KitchenBriefResponse,
    SketchResponse,
)
from services.kitchen_brief_service import KitchenBriefService

router = APIRouter(prefix="/my-kitchen", tags=["My kitchen"])


@router.get("/categories", response_model=List[BriefCategoryResponse])
def list_categories():
    return KitchenBriefService.categories()


@router.get("", response_model=KitchenBriefResponse)
def get_brief(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return KitchenBriefService.get(db, user.id)


@router.post("/selections/toggle", response_model=KitchenBriefResponse)
def toggle_option(
    request: BriefToggleRequest,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Pick or unpick one option; a single-choice category keeps only the latest pick."""
    return KitchenBriefService.toggle(db, user.id, request.category, request.value)


@router.post("/selections/{category_id}/all", response_model=KitchenBriefResponse)
def select_all(
    category_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return KitchenBriefService.select_all(db, user.id, category_id)


@router.delete("/selections/{category_id}", response_model=KitchenBriefResponse)
def clear_category(
    category_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return KitchenBriefService.clear_category(db, user.id, category_id)


@router.put("/notes", response_model=KitchenBriefResponse)
def set_notes(
    request: BriefNotesRequest,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return KitchenBriefService.set_notes(db, user.id, request.notes)


@router.put("/sketch", response_model=KitchenBriefResponse)
def save_sketch(
    request: BriefSketchRequest,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return KitchenBriefService.save_sketch(db, user.id, request.operations)


@router.post("/sketch/from-session/{session_id}", response_model=KitchenBriefResponse)
def save_sketch_from_session(
    session_id: str,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Store the current state of a sketch session as the brief's sketch."""
    return KitchenBriefService.save_sketch_from_session(db, user.id, session_id)


@router.post("/sketch/session", response_model=SketchResponse, status_code=status.HTTP_201_CREATED)
def open_sketch_session(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    return KitchenBriefService.open_sketch_session(db, user.id)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def reset_brief(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    KitchenBriefService.reset(db, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
