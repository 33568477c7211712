from pydantic import BaseModel, Field
from typing import Dict, List, Optional

from domain.enums import DragPhase
from domain.layout import BOARD_WIDTH, BOARD_HEIGHT


class CabinetDefinitionResponse(BaseModel):
    id: str
    name: str
    width: int
    depth: int
    description: Optional[str] = None


class CabinetGroupResponse(BaseModel):
    title: str
    items: List[CabinetDefinitionResponse]


class CabinetResponse(BaseModel):
    id: str
    name: str
    width: int
    depth: int
    x: float
    y: float


class BoardResponse(BaseModel):
    session_id: str
    width: int
    height: int
    dimensions_cm: Dict[str, int]
    grid_size: int
    scale: int
    elements: List[CabinetResponse]
    selected_id: Optional[str] = None
    dragging_id: Optional[str] = None


class BoardCreate(BaseModel):
    width: int = Field(default=BOARD_WIDTH, gt=0, le=10000)
    height: int = Field(default=BOARD_HEIGHT, gt=0, le=10000)


class AddCabinetRequest(BaseModel):
    definition_id: str


class DragRequest(BaseModel):
    """Pointer event in board coordinates (px from the board's top-left)."""

    phase: DragPhase
    element_id: Optional[str] = None
    pointer_x: float = Field(default=0.0, allow_inf_nan=False)
    pointer_y: float = Field(default=0.0, allow_inf_nan=False)
