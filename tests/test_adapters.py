"""
Tests for the outbound HTTP adapters (Supabase auth/storage, Gemini/Imagen).

All calls go through httpx.MockTransport; nothing leaves the process.
"""

import json
import uuid

import httpx
import pytest

from test_fixtures import make_settings
from adapters import GeminiAdapter, GeneratedImage, SupabaseAdapter
from adapters.gemini_adapter import (
    decode_image,
    extract_inline_image,
    extract_text_from_candidates,
)
from app.exceptions import ConfigurationError, UnauthorizedError, UpstreamServiceError


def supabase_with(handler, **overrides) -> SupabaseAdapter:
    return SupabaseAdapter(make_settings(**overrides), transport=httpx.MockTransport(handler))


def gemini_with(handler, **overrides) -> GeminiAdapter:
    return GeminiAdapter(make_settings(**overrides), transport=httpx.MockTransport(handler))


# =============================================================================
# SUPABASE AUTH
# =============================================================================


def test_get_user_sends_anon_key_and_token():
    user_id = uuid.uuid4()
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": str(user_id), "email": "ola@example.com"})

    user = supabase_with(handler).get_user("abc")
    assert user.id == user_id
    assert user.email == "ola@example.com"
    assert seen[0].url == "https://project.supabase.test/auth/v1/user"
    assert seen[0].headers["apikey"] == "anon-key"
    assert seen[0].headers["authorization"] == "Bearer abc"


def test_get_user_without_token_makes_no_call():
    calls = []
    adapter = supabase_with(lambda r: calls.append(r) or httpx.Response(200), supabase_url=None)
    with pytest.raises(UnauthorizedError):
        adapter.get_user(None)
    assert calls == []


def test_get_user_rejected_token():
    adapter = supabase_with(lambda r: httpx.Response(401, json={"msg": "bad jwt"}))
    with pytest.raises(UnauthorizedError):
        adapter.get_user("expired")


def test_get_user_malformed_payload():
    adapter = supabase_with(lambda r: httpx.Response(200, json={"id": "not-a-uuid"}))
    with pytest.raises(UnauthorizedError):
        adapter.get_user("abc")


def test_get_user_missing_config():
    adapter = supabase_with(lambda r: httpx.Response(200), supabase_anon_key=None)
    with pytest.raises(ConfigurationError):
        adapter.get_user("abc")


def test_get_user_network_error():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(UpstreamServiceError) as exc:
        supabase_with(handler).get_user("abc")
    assert exc.value.code == "auth_unavailable"
    assert exc.value.http_status == 502


# =============================================================================
# SUPABASE STORAGE
# =============================================================================


def test_upload_object():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"Key": "projects/u/p.png"})

    path = supabase_with(handler).upload_object("u/p.png", b"data", "image/png")
    assert path == "u/p.png"
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/storage/v1/object/projects/u/p.png"
    assert seen[0].headers["authorization"] == "Bearer service-key"
    assert seen[0].content == b"data"


def test_upload_failure_carries_body():
    adapter = supabase_with(lambda r: httpx.Response(400, text="Bucket not found"))
    with pytest.raises(UpstreamServiceError) as exc:
        adapter.upload_object("u/p.png", b"data", "image/png")
    assert exc.value.code == "upload_failed"
    assert exc.value.details == "Bucket not found"


def test_storage_requires_service_key():
    adapter = supabase_with(lambda r: httpx.Response(200), supabase_service_key=None)
    with pytest.raises(ConfigurationError):
        adapter.upload_object("u/p.png", b"data", "image/png")


def test_signed_url_relative_and_absolute():
    def relative(request):
        assert json.loads(request.content) == {"expiresIn": 3600}
        return httpx.Response(200, json={"signedURL": "/object/sign/projects/u/p.png?token=t"})

    url = supabase_with(relative).create_signed_url("u/p.png")
    assert url == "https://project.supabase.test/storage/v1/object/sign/projects/u/p.png?token=t"

    absolute = lambda request: httpx.Response(200, json={"signedURL": "https://cdn.test/p.png"})
    assert supabase_with(absolute).create_signed_url("u/p.png", 60) == "https://cdn.test/p.png"


def test_signed_url_failure():
    adapter = supabase_with(lambda r: httpx.Response(200, json={}))
    with pytest.raises(UpstreamServiceError) as exc:
        adapter.create_signed_url("u/p.png")
    assert exc.value.code == "sign_failed"


def test_remove_objects():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    supabase_with(handler).remove_objects(["u/p.png"])
    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/storage/v1/object/projects"
    assert json.loads(seen[0].content) == {"prefixes": ["u/p.png"]}


# =============================================================================
# GEMINI / IMAGEN
# =============================================================================


def test_extract_helpers():
    payload = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"text": "Jasna"},
                        {"text": "kuchnia"},
                        {"inlineData": {"mimeType": "image/jpeg", "data": "QUJD"}},
                    ]
                }
            }
        ]
    }
    assert extract_text_from_candidates(payload) == "Jasna kuchnia"
    assert extract_inline_image(payload) == {"mimeType": "image/jpeg", "data": "QUJD"}
    assert extract_text_from_candidates({}) == ""
    assert extract_inline_image({"candidates": []}) is None


def test_generated_image_helpers():
    image = GeneratedImage(b64="QUJD", mime_type="image/jpeg")
    assert image.extension == "jpg"
    assert image.data == b"ABC"
    assert image.to_data_url() == "data:image/jpeg;base64,QUJD"
    assert GeneratedImage(b64="QUJD").extension == "png"


def test_decode_image_rejects_garbage():
    with pytest.raises(UpstreamServiceError) as exc:
        decode_image(GeneratedImage(b64="not base64!!"))
    assert exc.value.code == "empty_image"


def test_refine_prompt_returns_none_on_failure():
    adapter = gemini_with(lambda r: httpx.Response(429, text="quota"))
    assert adapter.refine_prompt("Kuchnia") is None


def test_refine_prompt_sends_instruction():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200, json={"candidates": [{"content": {"parts": [{"text": "Kuchnia japandi"}]}}]}
        )

    assert gemini_with(handler).refine_prompt("Kuchnia z wyspą") == "Kuchnia japandi"
    body = json.loads(seen[0].content)
    assert "Kuchnia z wyspą" in body["contents"][0]["parts"][0]["text"]
    assert seen[0].headers["x-goog-api-key"] == "gemini-key"


def test_generate_image_reads_image_bytes_variant():
    handler = lambda r: httpx.Response(
        200, json={"predictions": [{"image": {"imageBytes": "QUJD"}, "mimeType": "image/jpeg"}]}
    )
    image = gemini_with(handler).generate_image("Kuchnia", "1:1")
    assert image.b64 == "QUJD"
    assert image.mime_type == "image/jpeg"


def test_generate_image_default_endpoint():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"predictions": [{"bytesBase64Encoded": "QUJD"}]})

    gemini_with(handler, imagen_api_url=None).generate_image("Kuchnia")
    assert str(seen[0].url) == (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "imagen-4.0-generate-001:predict"
    )
    assert json.loads(seen[0].content)["parameters"] == {"sampleCount": 1}


def test_edit_image_failures():
    failing = gemini_with(lambda r: httpx.Response(500, text="boom"))
    with pytest.raises(UpstreamServiceError) as exc:
        failing.edit_image("zielony", b"img", "image/png")
    assert exc.value.code == "edit_failed"

    no_image = gemini_with(
        lambda r: httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "sorry"}]}}]})
    )
    with pytest.raises(UpstreamServiceError) as exc:
        no_image.edit_image("zielony", b"img", "image/png")
    assert exc.value.code == "empty_image"


def test_edit_image_sends_instruction_and_image():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={"candidates": [{"content": {"parts": [{"inlineData": {"data": "QUJD"}}]}}]},
        )

    result = gemini_with(handler).edit_image("biały", b"ABC", "image/jpeg")
    assert result.to_data_url() == "data:image/jpeg;base64,QUJD"
    parts = json.loads(seen[0].content)["contents"][0]["parts"]
    assert parts[0]["text"] == "Change kitchen color to biały"
    assert parts[1]["inlineData"] == {"mimeType": "image/jpeg", "data": "QUJD"}
