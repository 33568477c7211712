from typing import Optional
from urllib.parse import urlsplit
import logging

from adapters import ImageFetchAdapter, RemoteImage, is_blocked_host
from app.exceptions import ServiceValidationError

logger = logging.getLogger("kuchnie.image_proxy")

ALLOWED_SCHEMES = ("http", "https")


class ImageProxyService:
    """Same-origin download of remote images"""

    @staticmethod
    def validate_url(url: Optional[str]) -> str:
        """Return ``url`` if it is an absolute http(s) URL to a public host, otherwise raise 400."""
        if not url or not url.strip():
            raise ServiceValidationError("Missing url parameter", code="missing_url")
        url = url.strip()
        try:
            parts = urlsplit(url)
            host = parts.hostname
        except ValueError:
            raise ServiceValidationError("Invalid url", code="bad_url")
        if parts.scheme.lower() not in ALLOWED_SCHEMES or not host:
            raise ServiceValidationError(
                "Only http and https URLs are allowed", code="invalid_protocol"
            )
        if is_blocked_host(host):
            raise ServiceValidationError(
                "Downloads from local or private addresses are not allowed", code="blocked_host"
            )
        return url

    @staticmethod
    def open(url: Optional[str], fetcher: ImageFetchAdapter) -> RemoteImage:
        url = ImageProxyService.validate_url(url)
        image = fetcher.open(url)
        logger.info(f"image_proxied url={url} content_type={image.content_type}")
        return image
