"""Google generative API adapter: prompt refinement, Imagen generation and image edits.
"""

import base64
import binascii
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from app.config import Settings, settings as default_settings
from app.exceptions import ConfigurationError, UpstreamServiceError, details_from

logger = logging.getLogger("kuchnie.gemini")

REFINE_INSTRUCTION = (
    "Przerób opis kuchni na maksymalnie konkretny tekst promptu pod generowanie "
    "obrazu: {prompt}. Uwzględnij styl (np. nowoczesna/industrial/boho), materiały "
    "frontów i blatów, kolory, układ (L/U/wyspa), oświetlenie, porę dnia, kąt ujęcia."
)
EDIT_INSTRUCTION = "Change kitchen color to {prompt}"
DEFAULT_MIME_TYPE = "image/png"


@dataclass
class GeneratedImage:
    """Base64 image payload as returned by the API"""

    b64: str
    mime_type: str = DEFAULT_MIME_TYPE

    @property
    def data(self) -> bytes:
        return base64.b64decode(self.b64, validate=True)

    @property
    def extension(self) -> str:
        subtype = self.mime_type.split("/")[-1].lower()
        return "jpg" if subtype == "jpeg" else subtype

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.b64}"


def extract_text_from_candidates(payload: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    texts = [part.get("text") for part in parts if isinstance(part, dict) and part.get("text")]
    return " ".join(texts).strip()


def extract_inline_image(payload: Dict[str, Any]) -> Optional[Dict[str, str]]:
    """First inline image part of the first candidate, if any."""
    try:
        parts = payload["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return None
    for part in parts:
        inline = part.get("inlineData") if isinstance(part, dict) else None
        if inline and inline.get("data"):
            return inline
    return None


class GeminiAdapter:
    """Thin client over the Gemini ``generateContent`` and Imagen ``:predict`` REST endpoints."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or default_settings
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.config.generation_timeout_sec, transport=self._transport
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.gemini_api_key or "",
        }

    def ensure_configured(self, require_text_model: bool = False) -> None:
        if not self.config.gemini_api_key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        if require_text_model and not self.config.gemini_api_url:
            raise ConfigurationError("GEMINI_API_URL is not set")

    def refine_prompt(self, prompt: str) -> Optional[str]:
        """Ask the text model for a sharper image prompt.

        Returns None when the text model is not configured or the call fails;
        the caller then keeps its own prompt.
        """
        if not self.config.gemini_api_url or not self.config.gemini_api_key:
            return None
        body = {"contents": [{"parts": [{"text": REFINE_INSTRUCTION.format(prompt=prompt)}]}]}
        try:
            with self._client() as client:
                response = client.post(
                    self.config.gemini_api_url, headers=self._headers(), json=body
                )
        except httpx.HTTPError as e:
            logger.warning("Gemini refine request failed: %s", e)
            return None

        if not response.is_success:
            logger.warning("Gemini refine failed status=%s body=%s", response.status_code, response.text)
            return None
        try:
            refined = extract_text_from_candidates(response.json())
        except ValueError:
            logger.warning("Gemini refine returned non-JSON body")
            return None
        return refined or None

    def generate_image(self, prompt: str, aspect_ratio: Optional[str] = None) -> GeneratedImage:
        """Generate one image with Imagen."""
        self.ensure_configured()
        parameters: Dict[str, Any] = {"sampleCount": 1}
        if aspect_ratio:
            parameters["aspectRatio"] = aspect_ratio
        body = {"instances": [{"prompt": prompt}], "parameters": parameters}

        try:
            with self._client() as client:
                response = client.post(
                    self.config.imagen_endpoint(), headers=self._headers(), json=body
                )
        except httpx.HTTPError as e:
            logger.error("Imagen request failed: %s", e)
            raise UpstreamServiceError("Image generation failed", details=str(e), code="gen_failed")

        if not response.is_success:
            logger.error("Imagen error status=%s body=%s", response.status_code, response.text)
            raise UpstreamServiceError(
                "Image generation failed",
                details=details_from(response.text),
                code="gen_failed",
            )

        try:
            payload = response.json()
        except ValueError:
            raise UpstreamServiceError("Image generation returned no image", code="empty_image")

        predictions = (payload.get("predictions") if isinstance(payload, dict) else None) or [{}]
        first = predictions[0] if isinstance(predictions[0], dict) else {}
        b64 = first.get("bytesBase64Encoded") or (first.get("image") or {}).get("imageBytes") or ""
        if not b64:
            raise UpstreamServiceError("Image generation returned no image", code="empty_image")
        return GeneratedImage(b64=b64, mime_type=first.get("mimeType") or DEFAULT_MIME_TYPE)

    def edit_image(self, prompt: str, image: bytes, mime_type: Optional[str] = None) -> GeneratedImage:
        """Recolour an uploaded kitchen photo."""
        self.ensure_configured(require_text_model=True)
        mime_type = mime_type or DEFAULT_MIME_TYPE
        body = {
            "contents": [
                {
                    "parts": [
                        {"text": EDIT_INSTRUCTION.format(prompt=prompt)},
                        {
                            "inlineData": {
                                "mimeType": mime_type,
                                "data": base64.b64encode(image).decode("ascii"),
                            }
                        },
                    ]
                }
            ]
        }

        try:
            with self._client() as client:
                response = client.post(
                    self.config.gemini_api_url, headers=self._headers(), json=body
                )
        except httpx.HTTPError as e:
            logger.error("Gemini edit request failed: %s", e)
            raise UpstreamServiceError("Image edit failed", details=str(e), code="edit_failed")

        if not response.is_success:
            logger.error("Gemini edit error status=%s body=%s", response.status_code, response.text)
            raise UpstreamServiceError(
                "Image edit failed", details=details_from(response.text), code="edit_failed"
            )

        try:
            inline = extract_inline_image(response.json())
        except ValueError:
            inline = None
        if not inline:
            raise UpstreamServiceError("Image edit returned no image", code="empty_image")
        return GeneratedImage(b64=inline["data"], mime_type=inline.get("mimeType") or mime_type)


def get_gemini_adapter() -> GeminiAdapter:
    """FastAPI dependency"""
    return GeminiAdapter()


def decode_image(image: GeneratedImage) -> bytes:
    """Image bytes, or an ``empty_image`` error when the payload is not valid base64."""
    try:
        data = image.data
    except (binascii.Error, ValueError):
        raise UpstreamServiceError("Image generation returned invalid data", code="empty_image")
    if not data:
        raise UpstreamServiceError("Image generation returned no image", code="empty_image")
    return data
