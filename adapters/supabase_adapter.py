"""Supabase adapter - auth token validation and object storage.

Records live in the Supabase Postgres and are reached through SQLAlchemy;
this adapter only covers the two REST services the ORM cannot reach.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional
from urllib.parse import quote
from uuid import UUID

import httpx

from app.config import Settings, settings as default_settings
from app.exceptions import (
    ConfigurationError,
    UnauthorizedError,
    UpstreamServiceError,
    details_from,
)

logger = logging.getLogger("kuchnie.supabase")


@dataclass(frozen=True)
class AuthUser:
    id: UUID
    email: Optional[str] = None


class SupabaseAdapter:
    def __init__(
        self,
        config: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.config = config or default_settings
        self._transport = transport

    # ------------------ Helpers ------------------

    def ensure_configured(self, storage: bool = False) -> None:
        if not self.config.supabase_url or not self.config.supabase_anon_key:
            raise ConfigurationError("SUPABASE_URL / SUPABASE_ANON_KEY are not set")
        if storage and not self._storage_key():
            raise ConfigurationError("SUPABASE_SERVICE_KEY is not set")

    def _storage_key(self) -> Optional[str]:
        return self.config.supabase_service_key

    def _base_url(self) -> str:
        return (self.config.supabase_url or "").rstrip("/")

    def _client(self) -> httpx.Client:
        return httpx.Client(
            timeout=self.config.supabase_timeout_sec, transport=self._transport
        )

    def _storage_headers(self) -> Dict[str, str]:
        key = self._storage_key() or ""
        return {"apikey": key, "Authorization": f"Bearer {key}"}

    def _object_url(self, path: str) -> str:
        bucket = quote(self.config.storage_bucket, safe="")
        return f"{self._base_url()}/storage/v1/object/{bucket}/{quote(path)}"

    # ------------------ Auth ------------------

    def get_user(self, access_token: Optional[str]) -> AuthUser:
        """Resolve an access token to its user; raises UnauthorizedError otherwise."""
        if not access_token:
            raise UnauthorizedError("Missing access token")
        self.ensure_configured()

        try:
            with self._client() as client:
                response = client.get(
                    f"{self._base_url()}/auth/v1/user",
                    headers={
                        "apikey": self.config.supabase_anon_key,
                        "Authorization": f"Bearer {access_token}",
                    },
                )
        except httpx.HTTPError as e:
            logger.error("Supabase auth request failed: %s", e)
            raise UpstreamServiceError(
                "Auth service unavailable", details=str(e), code="auth_unavailable", http_status=502
            )

        if not response.is_success:
            logger.info("Access token rejected status=%s", response.status_code)
            raise UnauthorizedError("Invalid or expired access token")

        try:
            payload = response.json()
            return AuthUser(id=UUID(str(payload["id"])), email=payload.get("email"))
        except (ValueError, KeyError, TypeError):
            logger.warning("Supabase auth returned an unexpected user payload")
            raise UnauthorizedError("Invalid or expired access token")

    # ------------------ Storage ------------------

    def upload_object(self, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` at ``path`` in the configured bucket; returns the path."""
        self.ensure_configured(storage=True)
        headers = self._storage_headers()
        headers.update({"Content-Type": content_type, "x-upsert": "false"})
        try:
            with self._client() as client:
                response = client.post(self._object_url(path), headers=headers, content=data)
        except httpx.HTTPError as e:
            logger.error("Storage upload request failed path=%s: %s", path, e)
            raise UpstreamServiceError("Upload failed", details=str(e), code="upload_failed")

        if not response.is_success:
            logger.error("Storage upload failed path=%s status=%s body=%s", path, response.status_code, response.text)
            raise UpstreamServiceError(
                "Upload failed", details=details_from(response.text), code="upload_failed"
            )
        logger.info("Stored object bucket=%s path=%s bytes=%d", self.config.storage_bucket, path, len(data))
        return path

    def create_signed_url(self, path: str, expires_in: Optional[int] = None) -> str:
        """Time-limited absolute URL for a private object."""
        self.ensure_configured(storage=True)
        expires_in = expires_in or self.config.signed_url_ttl_sec
        bucket = quote(self.config.storage_bucket, safe="")
        url = f"{self._base_url()}/storage/v1/object/sign/{bucket}/{quote(path)}"
        try:
            with self._client() as client:
                response = client.post(
                    url, headers=self._storage_headers(), json={"expiresIn": expires_in}
                )
        except httpx.HTTPError as e:
            logger.error("Signed URL request failed path=%s: %s", path, e)
            raise UpstreamServiceError("Could not sign URL", details=str(e), code="sign_failed")

        if not response.is_success:
            logger.error("Signed URL failed path=%s status=%s", path, response.status_code)
            raise UpstreamServiceError(
                "Could not sign URL", details=details_from(response.text), code="sign_failed"
            )

        try:
            payload = response.json()
            signed = payload.get("signedURL") or payload.get("signedUrl")
        except (ValueError, AttributeError):
            signed = None
        if not signed:
            raise UpstreamServiceError("Could not sign URL", code="sign_failed")
        if signed.startswith("http"):
            return signed
        return f"{self._base_url()}/storage/v1{signed}"

    def remove_objects(self, paths: List[str]) -> None:
        self.ensure_configured(storage=True)
        bucket = quote(self.config.storage_bucket, safe="")
        try:
            with self._client() as client:
                response = client.request(
                    "DELETE",
                    f"{self._base_url()}/storage/v1/object/{bucket}",
                    headers=self._storage_headers(),
                    json={"prefixes": paths},
                )
        except httpx.HTTPError as e:
            raise UpstreamServiceError("Could not remove objects", details=str(e), code="remove_failed")
        if not response.is_success:
            raise UpstreamServiceError(
                "Could not remove objects", details=details_from(response.text), code="remove_failed"
            )


def get_supabase_adapter() -> SupabaseAdapter:
    """FastAPI dependency"""
    return SupabaseAdapter()
