"""Room sketch sessions"""

from typing import List

from fastapi import APIRouter, Query, Response, status

from domain.schemas import (
    CommitResponse,
    DetailCreateRequest,
    DetailTypeResponse,
    DetailValueRequest,
    HitTestRequest,
    HitTestResponse,
    MeasurementRequest,
    MoveRequest,
    SketchResponse,
    StrokeRequest,
)
from services.sketch_service import SketchService

router = APIRouter(prefix="/sketches", tags=["Sketches"])


@router.post("", response_model=SketchResponse, status_code=status.HTTP_201_CREATED)
def create_sketch():
    return SketchService.create_session()


# Declared before /{session_id} so "detail-types" is not taken for a session id
@router.get("/detail-types", response_model=List[DetailTypeResponse])
def list_detail_types():
    """Installation details that can be attached to a wall dimension, with their fields."""
    return SketchService.detail_types()


@router.get("/{session_id}", response_model=SketchResponse)
def get_sketch(session_id: str):
    return SketchService.get_session(session_id)


@router.post("/{session_id}/strokes", response_model=CommitResponse)
def commit_stroke(session_id: str, stroke: StrokeRequest):
    """Commit a stroke; ``committed`` is false when the stroke drew nothing."""
    return SketchService.commit(session_id, stroke)


@router.post("/{session_id}/hit-test", response_model=HitTestResponse)
def hit_test(session_id: str, request: HitTestRequest):
    return SketchService.hit_test(session_id, request)


@router.post("/{session_id}/operations/{operation_id}/move", response_model=SketchResponse)
def move_operation(session_id: str, operation_id: str, request: MoveRequest):
    return SketchService.move(session_id, operation_id, request.dx, request.dy)


@router.delete("/{session_id}/operations/{operation_id}", response_model=SketchResponse)
def delete_operation(session_id: str, operation_id: str):
    return SketchService.delete_operation(session_id, operation_id)


@router.put("/{session_id}/operations/{operation_id}/measurement", response_model=SketchResponse)
def set_measurement(session_id: str, operation_id: str, request: MeasurementRequest):
    return SketchService.set_measurement(session_id, operation_id, request.measurement)


@router.post("/{session_id}/operations/{operation_id}/details", response_model=SketchResponse)
def add_detail(session_id: str, operation_id: str, request: DetailCreateRequest):
    return SketchService.add_detail(session_id, operation_id, request.type)


@router.patch(
    "/{session_id}/operations/{operation_id}/details/{detail_id}", response_model=SketchResponse
)
def set_detail_value(
    session_id: str, operation_id: str, detail_id: str, request: DetailValueRequest
):
    return SketchService.set_detail_value(
        session_id, operation_id, detail_id, request.field, request.value
    )


@router.delete(
    "/{session_id}/operations/{operation_id}/details/{detail_id}", response_model=SketchResponse
)
def remove_detail(session_id: str, operation_id: str, detail_id: str):
    return SketchService.remove_detail(session_id, operation_id, detail_id)


@router.post("/{session_id}/undo", response_model=SketchResponse)
def undo(session_id: str):
    return SketchService.undo(session_id)


@router.post("/{session_id}/redo", response_model=SketchResponse)
def redo(session_id: str):
    return SketchService.redo(session_id)


@router.post("/{session_id}/clear", response_model=SketchResponse)
def clear(session_id: str):
    return SketchService.clear(session_id)


@router.get("/{session_id}/render.svg")
def render_svg(
    session_id: str,
    width: int = Query(default=800, gt=0, le=8000),
    height: int = Query(default=600, gt=0, le=8000),
):
    svg = SketchService.render_svg(session_id, width, height)
    return Response(content=svg, media_type="image/svg+xml")
