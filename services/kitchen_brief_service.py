from typing import Any, Callable, List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import json
import logging

from app.exceptions import ServiceValidationError
from domain import kitchen_brief
from domain.kitchen_brief import CATEGORIES, BriefCategory, BriefOption, Selections
from domain.models import KitchenBrief
from domain.schemas import (
    BriefCategoryResponse,
    BriefOptionResponse,
    BriefSummaryEntry,
    KitchenBriefResponse,
    SketchResponse,
)
from domain.sketch import Operation, operation_to_dict, sanitize_sketch_value
from repositories import KitchenBriefRepository
from services.sketch_service import SketchService, pads

logger = logging.getLogger("kuchnie.kitchen_brief")


def _option_response(option: BriefOption) -> BriefOptionResponse:
    return BriefOptionResponse(
        value=option.value, label=option.label, description=option.description
    )


def _category_response(category: BriefCategory) -> BriefCategoryResponse:
    return BriefCategoryResponse(
        id=category.id,
        title=category.title,
        description=category.description,
        type="multi" if category.multiple else "single",
        options=[_option_response(option) for option in category.options],
    )


def _load_json(brief: KitchenBrief, column: str) -> Any:
    raw = getattr(brief, column)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning(f"kitchen_brief_unreadable user_id={brief.user_id} column={column}")
        return None


def _selections(brief: Optional[KitchenBrief]) -> Selections:
    if brief is None:
        return kitchen_brief.empty_selections()
    return kitchen_brief.sanitize_selections(_load_json(brief, "selections"))


def _operations(brief: Optional[KitchenBrief]) -> List[Operation]:
    if brief is None:
        return []
    return sanitize_sketch_value(_load_json(brief, "sketch"))


def _dump_sketch(operations: List[Operation]) -> str:
    return json.dumps({"operations": [operation_to_dict(op) for op in operations]})


def _to_response(brief: Optional[KitchenBrief]) -> KitchenBriefResponse:
    selections = _selections(brief)
    operations = _operations(brief)
    notes = brief.notes if brief is not None and brief.notes else ""
    summary = [
        BriefSummaryEntry(
            category=category.id,
            title=category.title,
            items=[_option_response(option) for option in options],
        )
        for category, options in kitchen_brief.summary(selections)
    ]
    return KitchenBriefResponse(
        selections=selections,
        notes=notes,
        sketch={"operations": [operation_to_dict(op) for op in operations]},
        summary=summary,
        has_summary=bool(summary),
        has_notes=bool(notes.strip()),
        has_sketch=bool(operations),
    )


class KitchenBriefService:
    """
    "Moja kuchnia" brief of the authenticated user.

    One row per user; a user without a row has an empty brief. Every change
    is a read-modify-write of that row under a row lock.
    """

    @staticmethod
    def categories() -> List[BriefCategoryResponse]:
        return [_category_response(category) for category in CATEGORIES]

    @staticmethod
    def get(db: Session, user_id: UUID) -> KitchenBriefResponse:
        return _to_response(KitchenBriefRepository(db).get_by_id(user_id))

    @staticmethod
    def _modify(
        db: Session, user_id: UUID, change: Callable[[KitchenBrief], None]
    ) -> KitchenBriefResponse:
        repo = KitchenBriefRepository(db)
        brief = repo.get_for_update(user_id)
        if brief is None:
            brief = KitchenBrief(
                user_id=user_id,
                selections=json.dumps(kitchen_brief.empty_selections()),
                notes="",
                sketch=_dump_sketch([]),
            )
            change(brief)
            try:
                brief = repo.create(brief)
                logger.info(f"kitchen_brief_created user_id={user_id}")
                return _to_response(brief)
            except IntegrityError:
                # Another request created the row first; change that one
                db.rollback()
                brief = repo.get_for_update(user_id)

        change(brief)
        brief = repo.update(brief)
        return _to_response(brief)

    @staticmethod
    def _change_selections(
        db: Session, user_id: UUID, update: Callable[[Selections], Selections]
    ) -> KitchenBriefResponse:
        def change(brief: KitchenBrief) -> None:
            try:
                selections = update(_selections(brief))
            except ValueError as e:
                raise ServiceValidationError(str(e), code="invalid_selection")
            brief.selections = json.dumps(selections)

        return KitchenBriefService._modify(db, user_id, change)

    @staticmethod
    def toggle(db: Session, user_id: UUID, category_id: str, value: str) -> KitchenBriefResponse:
        return KitchenBriefService._change_selections(
            db, user_id, lambda s: kitchen_brief.toggle(s, category_id, value)
        )

    @staticmethod
    def select_all(db: Session, user_id: UUID, category_id: str) -> KitchenBriefResponse:
        return KitchenBriefService._change_selections(
            db, user_id, lambda s: kitchen_brief.select_all(s, category_id)
        )

    @staticmethod
    def clear_category(db: Session, user_id: UUID, category_id: str) -> KitchenBriefResponse:
        return KitchenBriefService._change_selections(
            db, user_id, lambda s: kitchen_brief.clear_category(s, category_id)
        )

    @staticmethod
    def set_notes(db: Session, user_id: UUID, notes: str) -> KitchenBriefResponse:
        def change(brief: KitchenBrief) -> None:
            brief.notes = notes

        return KitchenBriefService._modify(db, user_id, change)

    @staticmethod
    def save_sketch(db: Session, user_id: UUID, raw_operations: List[Any]) -> KitchenBriefResponse:
        """Store the usable operations of ``raw_operations``, dimensions renumbered."""
        operations = sanitize_sketch_value({"operations": raw_operations})
        dropped = len(raw_operations) - len(operations)
        if dropped:
            logger.info(f"kitchen_brief_sketch_sanitized user_id={user_id} dropped={dropped}")

        def change(brief: KitchenBrief) -> None:
            brief.sketch = _dump_sketch(operations)

        return KitchenBriefService._modify(db, user_id, change)

    @staticmethod
    def save_sketch_from_session(
        db: Session, user_id: UUID, session_id: str
    ) -> KitchenBriefResponse:
        operations = pads.get(session_id).operations

        def change(brief: KitchenBrief) -> None:
            brief.sketch = _dump_sketch(operations)

        return KitchenBriefService._modify(db, user_id, change)

    @staticmethod
    def open_sketch_session(db: Session, user_id: UUID) -> SketchResponse:
        """Start a sketch session seeded with the stored sketch."""
        brief = KitchenBriefRepository(db).get_by_id(user_id)
        return SketchService.create_session(operations=_operations(brief))

    @staticmethod
    def reset(db: Session, user_id: UUID) -> None:
        if KitchenBriefRepository(db).delete(user_id):
            logger.info(f"kitchen_brief_reset user_id={user_id}")
