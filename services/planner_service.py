from typing import List
import logging

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import DragPhase
from domain.layout import CABINET_CATALOG, CABINET_GROUPS, LayoutBoard
from domain.schemas import (
    BoardResponse,
    CabinetDefinitionResponse,
    CabinetGroupResponse,
    DragRequest,
)
from services.session_store import SessionStore

logger = logging.getLogger("kuchnie.planner")

boards: SessionStore[LayoutBoard] = SessionStore(
    "Planner",
    max_items=settings.session_max_count,
    idle_ttl_sec=settings.session_idle_ttl_sec,
)


class PlannerService:
    """2D cabinet layout sessions"""

    @staticmethod
    def _response(session_id: str, board: LayoutBoard) -> BoardResponse:
        return BoardResponse(session_id=session_id, **board.to_dict())

    @staticmethod
    def catalog() -> List[CabinetGroupResponse]:
        return [
            CabinetGroupResponse(
                title=group.title,
                items=[
                    CabinetDefinitionResponse(
                        id=item.id,
                        name=item.name,
                        width=item.width,
                        depth=item.depth,
                        description=item.description,
                    )
                    for item in group.items
                ],
            )
            for group in CABINET_GROUPS
        ]

    @staticmethod
    def create_session(width: int, height: int) -> BoardResponse:
        board = LayoutBoard(width=width, height=height)
        session_id = boards.add(board)
        logger.info(f"planner_session_created session_id={session_id} size={width}x{height}")
        return PlannerService._response(session_id, board)

    @staticmethod
    def get_session(session_id: str) -> BoardResponse:
        return PlannerService._response(session_id, boards.get(session_id))

    @staticmethod
    def delete_session(session_id: str) -> None:
        boards.remove(session_id)
        logger.info(f"planner_session_deleted session_id={session_id}")

    @staticmethod
    def add_cabinet(session_id: str, definition_id: str) -> BoardResponse:
        board = boards.get(session_id)
        definition = CABINET_CATALOG.get(definition_id)
        if definition is None:
            raise ServiceValidationError(
                f"Unknown cabinet {definition_id}", code="unknown_cabinet"
            )
        element = board.add(definition)
        logger.debug(f"cabinet_added session_id={session_id} element_id={element.id}")
        return PlannerService._response(session_id, board)

    @staticmethod
    def drag(session_id: str, event: DragRequest) -> BoardResponse:
        """Apply one pointer event of a drag gesture."""
        board = boards.get(session_id)
        if event.phase == DragPhase.START:
            if not event.element_id:
                raise ServiceValidationError("element_id is required to start a drag")
            try:
                board.start_drag(event.element_id, event.pointer_x, event.pointer_y)
            except KeyError:
                raise NotFoundError(f"Element {event.element_id} not found")
        elif event.phase == DragPhase.MOVE:
            board.drag_to(event.pointer_x, event.pointer_y)
        else:
            board.end_drag()
        return PlannerService._response(session_id, board)

    @staticmethod
    def rotate(session_id: str) -> BoardResponse:
        board = boards.get(session_id)
        board.rotate_selected()
        return PlannerService._response(session_id, board)

    @staticmethod
    def remove_selected(session_id: str) -> BoardResponse:
        board = boards.get(session_id)
        board.remove_selected()
        return PlannerService._response(session_id, board)

    @staticmethod
    def clear(session_id: str) -> BoardResponse:
        board = boards.get(session_id)
        board.clear()
        return PlannerService._response(session_id, board)
