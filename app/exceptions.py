from typing import Any, Mapping, Optional


class KuchnieError(Exception):
    """Base class for errors surfaced to API callers.

    Attributes:
        message: human-readable message
        details: optional mapping (or upstream body) with extra context
        code: machine-readable error tag, e.g. ``missing_config``
        http_status: HTTP status code used by the exception handler
    """

    http_status = 500
    default_code = "server_error"
    default_message = "Server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[Any] = None,
        code: Optional[str] = None,
        http_status: Optional[int] = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details = details
        self.code = code or self.default_code
        if http_status is not None:
            self.http_status = http_status

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(KuchnieError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    default_code = "invalid_request"
    default_message = "Invalid input"


class UnauthorizedError(KuchnieError):
    """Raised when the access token is missing or rejected by the auth service."""

    http_status = 401
    default_code = "unauthorized"
    default_message = "Unauthorized"


class ForbiddenError(KuchnieError):
    """Raised when a user acts on a resource owned by someone else."""

    http_status = 403
    default_code = "forbidden"
    default_message = "Forbidden"


class NotFoundError(KuchnieError):
    """Raised when a requested resource was not found."""

    http_status = 404
    default_code = "not_found"
    default_message = "Not found"


class ConfigurationError(KuchnieError):
    """Raised when a required environment variable is not set."""

    http_status = 500
    default_code = "missing_config"
    default_message = "Missing configuration"


class UpstreamServiceError(KuchnieError):
    """Raised when an external API (generation, auth, storage) answers with a failure.

    The ``code`` names the failed step (``gen_failed``, ``upload_failed``, ...)
    and ``details`` carries the upstream response text when there is one.
    """

    http_status = 500
    default_code = "upstream_failed"
    default_message = "Upstream service failed"


def details_from(body: Optional[str], limit: int = 2000) -> Optional[str]:
    """Trim an upstream body for inclusion in an error payload."""
    if not body:
        return None
    return body if len(body) <= limit else body[:limit] + "..."


__all__ = [
    "KuchnieError",
    "ServiceValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConfigurationError",
    "UpstreamServiceError",
    "details_from",
]
