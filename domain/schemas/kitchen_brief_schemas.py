from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class BriefOptionResponse(BaseModel):
    value: str
    label: str
    description: Optional[str] = None


class BriefCategoryResponse(BaseModel):
    id: str
    title: str
    description: str
    type: str  # "single" or "multi"
    options: List[BriefOptionResponse]


class BriefSummaryEntry(BaseModel):
    category: str
    title: str
    items: List[BriefOptionResponse]


class KitchenBriefResponse(BaseModel):
    """Stored brief with the summary of picked options"""

    selections: Dict[str, List[str]]
    notes: str
    sketch: Dict[str, Any]
    summary: List[BriefSummaryEntry]
    has_summary: bool
    has_notes: bool
    has_sketch: bool


class BriefToggleRequest(BaseModel):
    category: str
    value: str


class BriefNotesRequest(BaseModel):
    notes: str = Field(max_length=10000)


class BriefSketchRequest(BaseModel):
    """Sketch operations as returned by the sketch API; unusable entries are dropped"""

    operations: List[Any] = Field(default_factory=list, max_length=5000)
