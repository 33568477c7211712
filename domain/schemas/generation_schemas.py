from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from domain.enums import AspectRatio
from domain.schemas.project_schemas import ProjectResponse


class GenerateRequest(BaseModel):
    """Body of POST /api/generate"""

    prompt: str = Field(default="", max_length=4000, description="Kitchen description")
    aspect_ratio: Optional[AspectRatio] = Field(
        default=None, alias="aspectRatio", description="Requested width:height"
    )
    options: List[str] = Field(
        default_factory=list, description="Selected feature-option labels"
    )
    access_token: Optional[str] = Field(
        default=None, alias="accessToken", description="Caller access token"
    )

    model_config = {"populate_by_name": True}

    @field_validator("options", mode="before")
    @classmethod
    def coerce_options(cls, v):
        """Anything that is not a list counts as no options"""
        if not isinstance(v, list):
            return []
        return [str(item) for item in v if item is not None]


class GenerateResponse(BaseModel):
    project: ProjectResponse
    signed_url: str = Field(..., alias="signedUrl")
    prompt: str

    model_config = {"populate_by_name": True}


class EditResponse(BaseModel):
    image_url: str = Field(..., alias="imageUrl")

    model_config = {"populate_by_name": True}
