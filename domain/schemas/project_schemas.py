from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID


class ProjectResponse(BaseModel):
    """Gallery entry"""

    project_id: UUID
    user_id: UUID
    prompt: str
    image_path: str
    aspect_ratio: Optional[str] = None
    favorite: bool = False
    created_at: Optional[datetime] = None
    signed_url: Optional[str] = Field(
        default=None, description="Time-limited link to the stored image"
    )

    model_config = {"from_attributes": True}


class FavoriteResponse(BaseModel):
    project_id: UUID
    favorite: bool
