from pydantic import BaseModel, Field, model_validator
from typing import List, Optional

from domain.enums import DetailType, OperationType
from domain.sketch import DEFAULT_THICKNESS, REFERENCE_WIDTH


class PointSchema(BaseModel):
    x: float
    y: float


class StrokeRequest(BaseModel):
    """A stroke to commit; which fields are required depends on ``type``."""

    type: OperationType
    thickness: float = Field(default=DEFAULT_THICKNESS, gt=0, le=100)
    points: List[PointSchema] = Field(default_factory=list)
    start: Optional[PointSchema] = None
    end: Optional[PointSchema] = None
    position: Optional[PointSchema] = None
    text: Optional[str] = None
    size: Optional[float] = Field(default=None, gt=0, le=500)

    @model_validator(mode="after")
    def check_fields(self):
        if self.type in (OperationType.LINE, OperationType.DIMENSION) and (
            self.start is None or self.end is None
        ):
            raise ValueError(f"{self.type.value} strokes need start and end")
        if self.type == OperationType.TEXT and self.position is None:
            raise ValueError("text strokes need a position")
        return self


class SketchResponse(BaseModel):
    session_id: str
    operations: List[dict]
    can_undo: bool
    can_redo: bool


class CommitResponse(BaseModel):
    committed: bool
    sketch: SketchResponse


class HitTestRequest(BaseModel):
    """Normalized pointer position on a surface of the given pixel size"""

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    width: float = Field(default=REFERENCE_WIDTH, gt=0, le=8000)
    height: float = Field(default=600, gt=0, le=8000)


class HitTestResponse(BaseModel):
    operation_id: Optional[str] = None
    operation: Optional[dict] = None


class MoveRequest(BaseModel):
    """Normalized offset"""

    dx: float = Field(ge=-1, le=1, allow_inf_nan=False)
    dy: float = Field(ge=-1, le=1, allow_inf_nan=False)


class MeasurementRequest(BaseModel):
    measurement: str = Field(max_length=100)


class DetailCreateRequest(BaseModel):
    type: DetailType


class DetailValueRequest(BaseModel):
    field: str
    value: str = Field(max_length=100)


class DetailFieldResponse(BaseModel):
    name: str
    label: str


class DetailTypeResponse(BaseModel):
    type: DetailType
    label: str
    fields: List[DetailFieldResponse]
