"""Profile routes for the authenticated user"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from adapters import AuthUser
from api.dependencies import get_current_user
from domain.models import get_db_session
from domain.schemas import ProfileResponse, ProfileUpdateRequest
from services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])
logger = logging.getLogger("kuchnie.api.profiles")


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    """Caller's profile; an empty one is created on first access."""
    profile = ProfileService.ensure_profile(db, user.id)
    return ProfileService.to_response(profile)


@router.put("/me", response_model=ProfileResponse)
def update_my_profile(
    profile_data: ProfileUpdateRequest,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
):
    profile = ProfileService.update_profile(db, user.id, profile_data)
    return ProfileService.to_response(profile)
