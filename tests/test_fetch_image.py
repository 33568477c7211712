"""
Tests for the same-origin image proxy (GET /api/fetch-image).
"""

import httpx
import pytest

from test_fixtures import client, make_settings
from adapters import ImageFetchAdapter, get_image_fetch_adapter
from app.exceptions import ServiceValidationError
from main import app
from services.image_proxy_service import ImageProxyService

JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"kitchen" * 1000


def use_remote(handler):
    fetcher = ImageFetchAdapter(make_settings(), transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_image_fetch_adapter] = lambda: fetcher


@pytest.mark.parametrize(
    "url, code",
    [
        (None, "missing_url"),
        ("", "missing_url"),
        ("ftp://example.com/kuchnia.jpg", "invalid_protocol"),
        ("file:///etc/passwd", "invalid_protocol"),
        ("javascript:alert(1)", "invalid_protocol"),
        ("kuchnia.jpg", "invalid_protocol"),
        ("http://[::1", "bad_url"),
    ],
)
def test_validate_url_rejects(url, code):
    with pytest.raises(ServiceValidationError) as exc:
        ImageProxyService.validate_url(url)
    assert exc.value.code == code


def test_non_http_url_is_bad_request():
    """A non-http(s) URL is rejected with 400 before any download."""
    calls = []
    use_remote(lambda request: calls.append(request) or httpx.Response(200))

    r = client.get("/api/fetch-image", params={"url": "ftp://example.com/kuchnia.jpg"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "invalid_protocol"
    assert calls == []


def test_missing_url_is_bad_request():
    r = client.get("/api/fetch-image")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "missing_url"


def test_streams_remote_image():
    use_remote(
        lambda request: httpx.Response(
            200, content=JPEG_BYTES, headers={"Content-Type": "image/jpeg"}
        )
    )

    r = client.get("/api/fetch-image", params={"url": "https://cdn.example.com/kuchnia.jpg"})
    assert r.status_code == 200
    assert r.content == JPEG_BYTES
    assert r.headers["content-type"] == "image/jpeg"
    assert r.headers["cache-control"] == "no-store"
    assert r.headers["access-control-allow-origin"] == "*"


def test_default_content_type():
    use_remote(lambda request: httpx.Response(200, content=b"raw"))

    r = client.get("/api/fetch-image", params={"url": "http://cdn.example.com/x"})
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/octet-stream"


def test_upstream_failure_is_bad_gateway():
    use_remote(lambda request: httpx.Response(404, text="not here"))

    r = client.get("/api/fetch-image", params={"url": "https://cdn.example.com/missing.jpg"})
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "download_failed"


def test_network_error_is_bad_gateway():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    use_remote(handler)
    r = client.get("/api/fetch-image", params={"url": "https://cdn.example.com/kuchnia.jpg"})
    assert r.status_code == 502
    assert r.json()["error"]["code"] == "download_failed"


@pytest.mark.parametrize(
    "url",
    [
        "http://localhost/kuchnia.jpg",
        "http://api.localhost:8000/x",
        "http://127.0.0.1/kuchnia.jpg",
        "http://10.0.0.5/kuchnia.jpg",
        "http://192.168.1.10/kuchnia.jpg",
        "http://169.254.169.254/latest/meta-data/",
        "http://0.0.0.0/",
        "http://2130706433/",
        "http://[::1]/kuchnia.jpg",
        "http://[::ffff:10.0.0.1]/kuchnia.jpg",
        "http://[fe80::1]/kuchnia.jpg",
        "http://224.0.0.1/kuchnia.jpg",
    ],
)
def test_local_and_private_hosts_are_rejected(url):
    with pytest.raises(ServiceValidationError) as exc:
        ImageProxyService.validate_url(url)
    assert exc.value.code == "blocked_host"


def test_public_hosts_pass_validation():
    for url in ("https://cdn.example.com/kuchnia.jpg", "http://8.8.8.8/x.png", "http://[2606:4700::1111]/x"):
        assert ImageProxyService.validate_url(url) == url


def test_private_host_is_bad_request_without_download():
    calls = []
    use_remote(lambda request: calls.append(request) or httpx.Response(200))

    r = client.get("/api/fetch-image", params={"url": "http://127.0.0.1:5432/"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "blocked_host"
    assert calls == []


def test_redirect_to_private_host_is_not_followed():
    calls = []

    def handler(request):
        calls.append(str(request.url))
        return httpx.Response(
            302, headers={"Location": "http://169.254.169.254/latest/meta-data/"}
        )

    use_remote(handler)
    r = client.get("/api/fetch-image", params={"url": "https://cdn.example.com/kuchnia.jpg"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "blocked_host"
    assert calls == ["https://cdn.example.com/kuchnia.jpg"]


def test_redirect_to_public_host_is_followed():
    def handler(request):
        if request.url.host == "cdn.example.com":
            return httpx.Response(302, headers={"Location": "https://img.example.org/k.jpg"})
        return httpx.Response(200, content=JPEG_BYTES, headers={"Content-Type": "image/jpeg"})

    use_remote(handler)
    r = client.get("/api/fetch-image", params={"url": "https://cdn.example.com/kuchnia.jpg"})
    assert r.status_code == 200
    assert r.content == JPEG_BYTES
