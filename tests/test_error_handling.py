"""
Error envelope and health check tests.

Every failure leaves the API in the same shape:
    {"success": false, "error": {"code", "message", "details"?}, "timestamp"}
"""

import pytest
from fastapi.testclient import TestClient

from test_fixtures import client
from api.middleware import error_body, make_serializable
from app.exceptions import (
    ConfigurationError,
    KuchnieError,
    NotFoundError,
    UpstreamServiceError,
    details_from,
)
from main import app
from services.company_service import CompanyService


def assert_envelope(response, status_code: int, code: str):
    assert response.status_code == status_code
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert body["error"]["message"]
    assert "timestamp" in body
    return body


# =============================================================================
# HEALTH
# =============================================================================


def test_health_check():
    r = client.get("/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "kuchnie.ai"}
    assert "X-Request-ID" in r.headers


# =============================================================================
# ENVELOPES
# =============================================================================


def test_unknown_route_is_http_404():
    assert_envelope(client.get("/no-such-route"), 404, "HTTP_404")


def test_wrong_method_is_http_405():
    assert_envelope(client.put("/health-check"), 405, "HTTP_405")


def test_missing_token_is_unauthorized():
    body = assert_envelope(client.get("/projects"), 401, "unauthorized")
    assert body["error"]["message"] == "Missing access token"


def test_non_bearer_header_is_unauthorized():
    r = client.get("/profiles/me", headers={"Authorization": "Basic abc"})
    assert_envelope(r, 401, "unauthorized")


def test_validation_error_envelope():
    r = client.post("/features/toggle", json={"prompt": "Jasne fronty"})
    body = assert_envelope(r, 422, "VALIDATION_ERROR")
    assert isinstance(body["error"]["details"], list)
    assert body["error"]["details"][0]["loc"][-1] == "label"


def test_not_found_envelope():
    body = assert_envelope(client.get("/companies/nope"), 404, "not_found")
    assert "details" not in body["error"]


def test_unexpected_error_is_internal_server_error(monkeypatch):
    def boom(city=None, companies=None):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(CompanyService, "list_companies", staticmethod(boom))
    quiet_client = TestClient(app, raise_server_exceptions=False)

    body = assert_envelope(quiet_client.get("/companies"), 500, "INTERNAL_SERVER_ERROR")
    assert "exploded" not in body["error"]["message"]


def test_upstream_error_carries_details(monkeypatch):
    def failing(city=None, companies=None):
        raise UpstreamServiceError("Upload failed", details="bucket gone", code="upload_failed")

    monkeypatch.setattr(CompanyService, "list_companies", staticmethod(failing))

    body = assert_envelope(client.get("/companies"), 500, "upload_failed")
    assert body["error"]["details"] == "bucket gone"


# =============================================================================
# EXCEPTION HELPERS
# =============================================================================


def test_exception_defaults_and_overrides():
    err = NotFoundError()
    assert (err.http_status, err.code, err.message) == (404, "not_found", "Not found")
    assert err.to_dict() == {"code": "not_found", "message": "Not found"}

    custom = KuchnieError("Nope", code="teapot", http_status=418, details={"a": 1})
    assert custom.http_status == 418
    assert custom.to_dict() == {"code": "teapot", "message": "Nope", "details": {"a": 1}}

    assert ConfigurationError("GEMINI_API_KEY missing").code == "missing_config"
    assert str(ConfigurationError("x")) == "x"


def test_details_from_trims_long_bodies():
    assert details_from(None) is None
    assert details_from("") is None
    assert details_from("short") == "short"
    trimmed = details_from("x" * 10, limit=4)
    assert trimmed == "xxxx..."


@pytest.mark.parametrize(
    "value,expected",
    [
        (ValueError("bad"), "bad"),
        (b"raw", "raw"),
        ({"ctx": {"error": ValueError("e")}}, {"ctx": {"error": "e"}}),
        ((1, 2), [1, 2]),
    ],
)
def test_make_serializable(value, expected):
    assert make_serializable(value) == expected


def test_error_body_omits_empty_details():
    body = error_body("x", "y")
    assert body["error"] == {"code": "x", "message": "y"}
    assert body["success"] is False
