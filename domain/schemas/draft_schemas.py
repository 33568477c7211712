from pydantic import BaseModel, Field
from typing import Optional

from domain.enums import AspectRatio
from domain.kitchen_features import ASPECT_RATIO_STORAGE_KEY, PROMPT_STORAGE_KEY


class DraftState(BaseModel):
    """Last used aspect ratio and the prompt being written"""

    aspect_ratio: Optional[AspectRatio] = Field(default=None, alias=ASPECT_RATIO_STORAGE_KEY)
    prompt_draft: Optional[str] = Field(default=None, alias=PROMPT_STORAGE_KEY, max_length=4000)

    model_config = {"populate_by_name": True}
