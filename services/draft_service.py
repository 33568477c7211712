from typing import Any, Dict
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from domain.enums import AspectRatio
from domain.models import Draft
from domain.schemas import DraftState
from repositories import DraftRepository

logger = logging.getLogger("kuchnie.drafts")


def _to_state(draft: Draft) -> DraftState:
    aspect_ratio = None
    if draft.aspect_ratio:
        try:
            aspect_ratio = AspectRatio(draft.aspect_ratio)
        except ValueError:
            logger.warning(
                f"draft_aspect_ratio_dropped user_id={draft.user_id} value={draft.aspect_ratio}"
            )
    return DraftState(aspect_ratio=aspect_ratio, prompt_draft=draft.prompt_draft)


def _apply(draft: Draft, values: Dict[str, Any]) -> None:
    for field, value in values.items():
        setattr(draft, field, value)


class DraftService:
    """
    Per-user draft: the last aspect ratio and the prompt in progress.

    One row per user; a user without a row has an empty draft. Updates are
    partial and touch only the columns present in the request.
    """

    @staticmethod
    def load(db: Session, user_id: UUID) -> DraftState:
        draft = DraftRepository(db).get_by_id(user_id)
        if draft is None:
            return DraftState()
        return _to_state(draft)

    @staticmethod
    def save(db: Session, user_id: UUID, update: DraftState) -> DraftState:
        """Merge the fields set in ``update`` into the stored draft."""
        values = update.model_dump(mode="json", exclude_unset=True)
        repo = DraftRepository(db)

        draft = repo.get_for_update(user_id)
        if draft is None:
            try:
                draft = repo.create(Draft(user_id=user_id, **values))
                logger.info(f"draft_created user_id={user_id}")
                return _to_state(draft)
            except IntegrityError:
                # Another request created the row first; update that one
                db.rollback()
                draft = repo.get_for_update(user_id)

        _apply(draft, values)
        draft = repo.update(draft)
        logger.debug(f"draft_saved user_id={user_id} fields={sorted(values)}")
        return _to_state(draft)

    @staticmethod
    def delete(db: Session, user_id: UUID) -> None:
        if DraftRepository(db).delete(user_id):
            logger.debug(f"draft_deleted user_id={user_id}")
