"""Image generation, edit and same-origin image proxy routes"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from starlette.background import BackgroundTask
from typing import Optional
import logging

from adapters import (
    GeminiAdapter,
    ImageFetchAdapter,
    SupabaseAdapter,
    get_gemini_adapter,
    get_image_fetch_adapter,
    get_supabase_adapter,
)
from api.dependencies import bearer_token
from api.responses import ERROR_RESPONSES
from domain.models import get_db_session
from domain.schemas import EditResponse, GenerateRequest, GenerateResponse
from services.generation_service import GenerationService
from services.image_proxy_service import ImageProxyService

router = APIRouter(prefix="/api", tags=["Generation"])
logger = logging.getLogger("kuchnie.api.generate")


@router.post(
    "/generate",
    response_model=GenerateResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
def generate(
    request: GenerateRequest,
    header_token: Optional[str] = Depends(bearer_token),
    db: Session = Depends(get_db_session),
    gemini: GeminiAdapter = Depends(get_gemini_adapter),
    supabase: SupabaseAdapter = Depends(get_supabase_adapter),
):
    """
    Generate a kitchen visualization from a description and selected options.

    The access token may come from the ``Authorization`` header or from the
    ``accessToken`` field of the body; the header wins when both are present.
    """
    token = header_token or request.access_token
    return GenerationService.generate(db, request, token, gemini, supabase)


@router.post("/edit", response_model=EditResponse, response_model_by_alias=True, responses=ERROR_RESPONSES)
def edit(
    prompt: str = Form(default=""),
    image: Optional[UploadFile] = File(default=None),
    gemini: GeminiAdapter = Depends(get_gemini_adapter),
):
    """Recolour an uploaded kitchen photo according to ``prompt``."""
    data = image.file.read() if image is not None else None
    mime_type = image.content_type if image is not None else None
    image_url = GenerationService.edit(prompt, data, mime_type, gemini)
    return EditResponse(image_url=image_url)


@router.get("/fetch-image", responses=ERROR_RESPONSES)
def fetch_image(
    url: Optional[str] = Query(default=None),
    fetcher: ImageFetchAdapter = Depends(get_image_fetch_adapter),
):
    """Stream a remote image through this origin so the browser can save it."""
    remote = ImageProxyService.open(url, fetcher)
    return StreamingResponse(
        remote.chunks,
        media_type=remote.content_type,
        headers={
            "Cache-Control": "no-store",
            "Access-Control-Allow-Origin": "*",
        },
        background=BackgroundTask(remote.close),
    )
