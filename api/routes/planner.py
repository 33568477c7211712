"""2D cabinet planner sessions"""

from fastapi import APIRouter, Body, Response, status
from typing import List, Optional
import logging

from domain.schemas import (
    AddCabinetRequest,
    BoardCreate,
    BoardResponse,
    CabinetGroupResponse,
    DragRequest,
)
from services.planner_service import PlannerService

router = APIRouter(prefix="/planner", tags=["Planner"])
logger = logging.getLogger("kuchnie.api.planner")


@router.get("/catalog", response_model=List[CabinetGroupResponse])
def get_catalog():
    return PlannerService.catalog()


@router.post("/sessions", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
def create_session(board: Optional[BoardCreate] = Body(default=None)):
    """Start a planning session; board size defaults to 900 x 520 px."""
    board = board or BoardCreate()
    return PlannerService.create_session(board.width, board.height)


@router.get("/sessions/{session_id}", response_model=BoardResponse)
def get_session(session_id: str):
    return PlannerService.get_session(session_id)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str):
    PlannerService.delete_session(session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/sessions/{session_id}/elements", response_model=BoardResponse)
def add_cabinet(session_id: str, request: AddCabinetRequest):
    return PlannerService.add_cabinet(session_id, request.definition_id)


@router.post("/sessions/{session_id}/drag", response_model=BoardResponse)
def drag(session_id: str, event: DragRequest):
    """One pointer event (start, move or end) of a drag gesture."""
    return PlannerService.drag(session_id, event)


@router.post("/sessions/{session_id}/rotate", response_model=BoardResponse)
def rotate(session_id: str):
    return PlannerService.rotate(session_id)


@router.post("/sessions/{session_id}/remove", response_model=BoardResponse)
def remove_selected(session_id: str):
    return PlannerService.remove_selected(session_id)


@router.post("/sessions/{session_id}/clear", response_model=BoardResponse)
def clear(session_id: str):
    return PlannerService.clear(session_id)
