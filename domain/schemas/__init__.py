"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.project_schemas import ProjectResponse, FavoriteResponse
from domain.schemas.generation_schemas import (
    GenerateRequest,
    GenerateResponse,
    EditResponse,
)
from domain.schemas.profile_schemas import ProfileResponse, ProfileUpdateRequest
from domain.schemas.draft_schemas import DraftState
from domain.schemas.feature_schemas import (
    FeatureOptionResponse,
    FeatureCategoryResponse,
    MergePromptRequest,
    TogglePromptRequest,
    PromptResponse,
)
from domain.schemas.company_schemas import (
    CompanyColumnResponse,
    CompanyDetail,
    CompanyResponse,
    CityGroupResponse,
    CompanyMapResponse,
)
from domain.schemas.planner_schemas import (
    CabinetDefinitionResponse,
    CabinetGroupResponse,
    CabinetResponse,
    BoardResponse,
    BoardCreate,
    AddCabinetRequest,
    DragRequest,
)
from domain.schemas.kitchen_brief_schemas import (
    BriefOptionResponse,
    BriefCategoryResponse,
    BriefSummaryEntry,
    KitchenBriefResponse,
    BriefToggleRequest,
    BriefNotesRequest,
    BriefSketchRequest,
)
from domain.schemas.sketch_schemas import (
    PointSchema,
    StrokeRequest,
    SketchResponse,
    CommitResponse,
    HitTestRequest,
    HitTestResponse,
    MoveRequest,
    MeasurementRequest,
    DetailCreateRequest,
    DetailValueRequest,
    DetailFieldResponse,
    DetailTypeResponse,
)

__all__ = [
    # Projects and generation
    "ProjectResponse",
    "FavoriteResponse",
    "GenerateRequest",
    "GenerateResponse",
    "EditResponse",
    # Profiles and drafts
    "ProfileResponse",
    "ProfileUpdateRequest",
    "DraftState",
    # Feature options
    "FeatureOptionResponse",
    "FeatureCategoryResponse",
    "MergePromptRequest",
    "TogglePromptRequest",
    "PromptResponse",
    # Companies
    "CompanyColumnResponse",
    "CompanyDetail",
    "CompanyResponse",
    "CityGroupResponse",
    "CompanyMapResponse",
    # Planner
    "CabinetDefinitionResponse",
    "CabinetGroupResponse",
    "CabinetResponse",
    "BoardResponse",
    "BoardCreate",
    "AddCabinetRequest",
    "DragRequest",
    # Sketch
    "PointSchema",
    "StrokeRequest",
    "SketchResponse",
    "CommitResponse",
    "HitTestRequest",
    "HitTestResponse",
    "MoveRequest",
    "MeasurementRequest",
    "DetailCreateRequest",
    "DetailValueRequest",
    "DetailFieldResponse",
    "DetailTypeResponse",
    # Kitchen brief
    "BriefOptionResponse",
    "BriefCategoryResponse",
    "BriefSummaryEntry",
    "KitchenBriefResponse",
    "BriefToggleRequest",
    "BriefNotesRequest",
    "BriefSketchRequest",
]
