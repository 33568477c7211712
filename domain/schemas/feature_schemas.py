from pydantic import BaseModel, Field
from typing import List


class FeatureOptionResponse(BaseModel):
    label: str
    prompt_text: str


class FeatureCategoryResponse(BaseModel):
    name: str
    options: List[FeatureOptionResponse]


class MergePromptRequest(BaseModel):
    prompt: str = ""
    selected: List[str] = Field(default_factory=list, description="Option labels")


class TogglePromptRequest(BaseModel):
    prompt: str = ""
    label: str = Field(..., min_length=1)


class PromptResponse(BaseModel):
    prompt: str
    selected: List[str]
