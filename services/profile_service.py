from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import Profile
from domain.schemas import ProfileResponse, ProfileUpdateRequest
from repositories import ProfileRepository

logger = logging.getLogger("kuchnie.profile")


def is_complete(profile: Profile) -> bool:
    """A profile is complete once both nick and postal code are filled in."""
    return bool((profile.nick or "").strip() and (profile.postal_code or "").strip())


class ProfileService:
    """Business logic for profile management"""

    @staticmethod
    def to_response(profile: Profile) -> ProfileResponse:
        response = ProfileResponse.model_validate(profile)
        response.complete = is_complete(profile)
        return response

    @staticmethod
    def ensure_profile(db: Session, user_id: UUID) -> Profile:
        """Return the user's profile, creating an empty one on first access."""
        repo = ProfileRepository(db)
        profile = repo.get_by_id(user_id)
        if profile is None:
            profile = repo.create(Profile(user_id=user_id, nick="", postal_code=""))
            logger.info(f"profile_created user_id={user_id}")
        return profile

    @staticmethod
    def update_profile(
        db: Session, user_id: UUID, profile_data: ProfileUpdateRequest
    ) -> Profile:
        """Apply the fields present in ``profile_data``; others keep their value."""
        profile = ProfileService.ensure_profile(db, user_id)
        if profile_data.nick is not None:
            profile.nick = profile_data.nick
        if profile_data.postal_code is not None:
            profile.postal_code = profile_data.postal_code
        profile = ProfileRepository(db).update(profile)

        logger.info(f"profile_updated user_id={user_id} complete={is_complete(profile)}")
        return profile
