from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging
import uuid

from adapters import GeminiAdapter, SupabaseAdapter
from adapters.gemini_adapter import decode_image
from app.exceptions import ServiceValidationError, UpstreamServiceError
from domain.kitchen_features import compose_generation_prompt
from domain.models import Project
from domain.schemas import GenerateRequest, GenerateResponse, ProjectResponse
from repositories import ProjectRepository

logger = logging.getLogger("kuchnie.generation")


class GenerationService:
    """Image generation and edit flows"""

    @staticmethod
    def build_prompt(prompt: str, options: List[str]) -> str:
        """User text merged with the selected option phrases.

        Falls back to a plain join when merging leaves nothing behind.
        """
        merged = compose_generation_prompt(prompt, options)
        if merged:
            return merged
        return ", ".join(part.strip() for part in [prompt, *options] if part and part.strip())

    @staticmethod
    def generate(
        db: Session,
        request: GenerateRequest,
        access_token: Optional[str],
        gemini: GeminiAdapter,
        supabase: SupabaseAdapter,
    ) -> GenerateResponse:
        """
        Generate a kitchen image, store it and record a project.

        Steps run in order and stop at the first failure; an object uploaded
        before a failed insert stays in storage.
        """
        if not request.prompt.strip() and not request.options:
            raise ServiceValidationError("Prompt is required", code="missing_prompt")

        user = supabase.get_user(access_token)

        gemini.ensure_configured()
        supabase.ensure_configured(storage=True)

        final_prompt = GenerationService.build_prompt(request.prompt, request.options)
        refined = gemini.refine_prompt(final_prompt)
        if refined:
            logger.info(f"prompt_refined user_id={user.id} chars={len(refined)}")
            final_prompt = refined
        else:
            logger.info(f"prompt_unrefined user_id={user.id}")

        aspect_ratio = request.aspect_ratio.value if request.aspect_ratio else None
        image = gemini.generate_image(final_prompt, aspect_ratio)
        data = decode_image(image)

        project_id = uuid.uuid4()
        path = f"{user.id}/{project_id}.{image.extension}"
        supabase.upload_object(path, data, image.mime_type)

        project = Project(
            project_id=project_id,
            user_id=user.id,
            prompt=final_prompt,
            image_path=path,
            aspect_ratio=aspect_ratio,
            favorite=False,
        )
        try:
            project = ProjectRepository(db).create(project)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"project_insert_failed user_id={user.id} path={path} error={e}")
            raise UpstreamServiceError(
                "Could not save project", details=str(e), code="db_insert_failed"
            )

        signed_url = supabase.create_signed_url(path)

        logger.info(
            f"project_generated user_id={user.id} project_id={project_id} "
            f"aspect_ratio={aspect_ratio} bytes={len(data)}"
        )
        response_project = ProjectResponse.model_validate(project)
        response_project.signed_url = signed_url
        return GenerateResponse(project=response_project, signed_url=signed_url, prompt=final_prompt)

    @staticmethod
    def edit(
        prompt: str,
        image: Optional[bytes],
        mime_type: Optional[str],
        gemini: GeminiAdapter,
    ) -> str:
        """Recolour an uploaded photo; returns the result as a data URL."""
        if not image:
            raise ServiceValidationError("Image file is required", code="no_image")
        result = gemini.edit_image(prompt or "", image, mime_type)
        logger.info(f"image_edited bytes_in={len(image)} mime={result.mime_type}")
        return result.to_data_url()
