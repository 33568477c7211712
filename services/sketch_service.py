from typing import Callable, List, Optional, TypeVar
import logging

from app.config import settings
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import OperationType
from domain.schemas import (
    CommitResponse,
    DetailFieldResponse,
    DetailTypeResponse,
    HitTestRequest,
    HitTestResponse,
    SketchResponse,
    StrokeRequest,
)
from domain.sketch import (
    DETAIL_DEFINITIONS,
    DETAIL_FIELD_LABELS,
    Operation,
    SketchPad,
    operation_to_dict,
)
from services.session_store import SessionStore

logger = logging.getLogger("kuchnie.sketch")

T = TypeVar("T")

pads: SessionStore[SketchPad] = SessionStore(
    "Sketch",
    max_items=settings.session_max_count,
    idle_ttl_sec=settings.session_idle_ttl_sec,
)


class SketchService:
    """Room sketch sessions: stroke commits, editing, history and replay"""

    @staticmethod
    def _response(session_id: str, pad: SketchPad) -> SketchResponse:
        return SketchResponse(session_id=session_id, **pad.to_dict())

    @staticmethod
    def _edit(session_id: str, change: Callable[[SketchPad], T]) -> SketchResponse:
        """Run ``change`` on the session's pad; unknown ids are 404, invalid edits 400."""
        pad = pads.get(session_id)
        try:
            change(pad)
        except KeyError as e:
            raise NotFoundError(f"Sketch element {e.args[0]} not found")
        except ValueError as e:
            raise ServiceValidationError(str(e), code="invalid_edit")
        return SketchService._response(session_id, pad)

    @staticmethod
    def create_session(operations: Optional[List[Operation]] = None) -> SketchResponse:
        pad = SketchPad(operations=operations)
        session_id = pads.add(pad)
        logger.info(f"sketch_session_created session_id={session_id} operations={len(pad.operations)}")
        return SketchService._response(session_id, pad)

    @staticmethod
    def get_session(session_id: str) -> SketchResponse:
        return SketchService._response(session_id, pads.get(session_id))

    @staticmethod
    def detail_types() -> List[DetailTypeResponse]:
        return [
            DetailTypeResponse(
                type=definition.type,
                label=definition.label,
                fields=[
                    DetailFieldResponse(name=name, label=DETAIL_FIELD_LABELS[name])
                    for name in definition.fields
                ],
            )
            for definition in DETAIL_DEFINITIONS
        ]

    @staticmethod
    def commit(session_id: str, stroke: StrokeRequest) -> CommitResponse:
        """Commit a stroke; strokes that draw nothing are dropped."""
        pad = pads.get(session_id)
        if stroke.type == OperationType.FREEHAND:
            operation = pad.commit_freehand(
                [(p.x, p.y) for p in stroke.points], thickness=stroke.thickness
            )
        elif stroke.type == OperationType.LINE:
            operation = pad.commit_line(
                (stroke.start.x, stroke.start.y),
                (stroke.end.x, stroke.end.y),
                thickness=stroke.thickness,
            )
        elif stroke.type == OperationType.DIMENSION:
            operation = pad.commit_dimension(
                (stroke.start.x, stroke.start.y), (stroke.end.x, stroke.end.y)
            )
        else:
            operation = pad.commit_text(
                (stroke.position.x, stroke.position.y), stroke.text or "", size=stroke.size
            )

        if operation is None:
            logger.debug(f"stroke_discarded session_id={session_id} type={stroke.type.value}")
        return CommitResponse(
            committed=operation is not None,
            sketch=SketchService._response(session_id, pad),
        )

    @staticmethod
    def hit_test(session_id: str, request: HitTestRequest) -> HitTestResponse:
        """Topmost operation under the pointer, for selection."""
        operation = pads.get(session_id).hit_test(
            request.x, request.y, request.width, request.height
        )
        if operation is None:
            return HitTestResponse()
        return HitTestResponse(operation_id=operation.id, operation=operation_to_dict(operation))

    @staticmethod
    def move(session_id: str, operation_id: str, dx: float, dy: float) -> SketchResponse:
        return SketchService._edit(session_id, lambda pad: pad.translate(operation_id, dx, dy))

    @staticmethod
    def delete_operation(session_id: str, operation_id: str) -> SketchResponse:
        def delete(pad: SketchPad) -> None:
            if not pad.delete(operation_id):
                raise KeyError(operation_id)

        response = SketchService._edit(session_id, delete)
        logger.debug(f"sketch_operation_deleted session_id={session_id} operation_id={operation_id}")
        return response

    @staticmethod
    def set_measurement(session_id: str, operation_id: str, measurement: str) -> SketchResponse:
        return SketchService._edit(
            session_id, lambda pad: pad.set_measurement(operation_id, measurement)
        )

    @staticmethod
    def add_detail(session_id: str, operation_id: str, detail_type: str) -> SketchResponse:
        return SketchService._edit(session_id, lambda pad: pad.add_detail(operation_id, detail_type))

    @staticmethod
    def set_detail_value(
        session_id: str, operation_id: str, detail_id: str, field_name: str, value: str
    ) -> SketchResponse:
        return SketchService._edit(
            session_id,
            lambda pad: pad.set_detail_value(operation_id, detail_id, field_name, value),
        )

    @staticmethod
    def remove_detail(session_id: str, operation_id: str, detail_id: str) -> SketchResponse:
        return SketchService._edit(
            session_id, lambda pad: pad.remove_detail(operation_id, detail_id)
        )

    @staticmethod
    def undo(session_id: str) -> SketchResponse:
        pad = pads.get(session_id)
        pad.undo()
        return SketchService._response(session_id, pad)

    @staticmethod
    def redo(session_id: str) -> SketchResponse:
        pad = pads.get(session_id)
        pad.redo()
        return SketchService._response(session_id, pad)

    @staticmethod
    def clear(session_id: str) -> SketchResponse:
        pad = pads.get(session_id)
        pad.clear()
        return SketchService._response(session_id, pad)

    @staticmethod
    def render_svg(session_id: str, width: int, height: int) -> str:
        return pads.get(session_id).render_svg(width, height)
