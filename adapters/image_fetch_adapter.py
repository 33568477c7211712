"""Server-side download of remote images for the same-origin proxy.
"""

import ipaddress
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

import httpx

from app.config import Settings, settings as default_settings
from app.exceptions import ServiceValidationError, UpstreamServiceError

logger = logging.getLogger("kuchnie.image_fetch")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def is_blocked_host(host: str) -> bool:
    """True for localhost names and for IP literals outside the public internet.

    Host names other than localhost are not resolved here.
    """
    host = host.rstrip(".").lower()
    if host == "localhost" or host.endswith(".localhost"):
        return True
    try:
        # Bare integers such as 2130706433 are dialled as IPv4 addresses
        ip = ipaddress.ip_address(int(host) if host.isdigit() else host)
    except ValueError:
        return False
    if ip.version == 6 and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return not ip.is_global or ip.is_multicast


def reject_blocked_host(request: httpx.Request) -> None:
    """Request hook, also run for every redirect hop."""
    if is_blocked_host(request.url.host):
        logger.warning("Image download blocked url=%s", request.url)
        raise ServiceValidationError(
            "Downloads from local or private addresses are not allowed", code="blocked_host"
        )


@dataclass
class RemoteImage:
    """An open remote response; iterate ``chunks`` exactly once."""

    content_type: str
    chunks: Iterator[bytes]
    close: Callable[[], None]


class ImageFetchAdapter:
    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or default_settings
        self._transport = transport

    def open(self, url: str) -> RemoteImage:
        """Start downloading ``url``; the body is streamed lazily."""
        client = httpx.Client(
            timeout=self.config.fetch_image_timeout_sec,
            follow_redirects=True,
            transport=self._transport,
            event_hooks={"request": [reject_blocked_host]},
        )
        try:
            response = client.send(client.build_request("GET", url), stream=True)
        except ServiceValidationError:
            client.close()
            raise
        except httpx.HTTPError as e:
            client.close()
            logger.warning("Image download failed url=%s: %s", url, e)
            raise UpstreamServiceError(
                "Download failed", details=str(e), code="download_failed", http_status=502
            )

        def close() -> None:
            response.close()
            client.close()

        if not response.is_success:
            logger.warning("Image download failed url=%s status=%s", url, response.status_code)
            close()
            raise UpstreamServiceError("Download failed", code="download_failed", http_status=502)

        def chunks() -> Iterator[bytes]:
            try:
                yield from response.iter_bytes()
            finally:
                close()

        return RemoteImage(
            content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
            chunks=chunks(),
            close=close,
        )


def get_image_fetch_adapter() -> ImageFetchAdapter:
    """FastAPI dependency"""
    return ImageFetchAdapter()
