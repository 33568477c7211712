"""Kitchen feature options and prompt merging"""

from fastapi import APIRouter
from typing import List

from domain.kitchen_features import (
    FEATURE_CATEGORIES,
    extract_option_labels_from_prompt,
    merge_prompt_with_selected_options,
    toggle_option,
)
from domain.schemas import (
    FeatureCategoryResponse,
    FeatureOptionResponse,
    MergePromptRequest,
    PromptResponse,
    TogglePromptRequest,
)

router = APIRouter(prefix="/features", tags=["Features"])


@router.get("", response_model=List[FeatureCategoryResponse])
def list_features():
    return [
        FeatureCategoryResponse(
            name=category.name,
            options=[
                FeatureOptionResponse(label=o.label, prompt_text=o.prompt_text)
                for o in category.options
            ],
        )
        for category in FEATURE_CATEGORIES
    ]


@router.post("/merge", response_model=PromptResponse)
def merge_prompt(request: MergePromptRequest):
    """Rewrite the prompt so its option phrases match ``selected``."""
    prompt = merge_prompt_with_selected_options(request.prompt, request.selected)
    return PromptResponse(prompt=prompt, selected=extract_option_labels_from_prompt(prompt))


@router.post("/toggle", response_model=PromptResponse)
def toggle(request: TogglePromptRequest):
    prompt = toggle_option(request.prompt, request.label)
    return PromptResponse(prompt=prompt, selected=extract_option_labels_from_prompt(prompt))
