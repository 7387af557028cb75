"""CloudinaryClient request signing and response handling."""

import asyncio
import hashlib

import httpx
import pytest

from app.config import Settings
from app.services.media_client import CloudinaryClient, MediaHostError, UploadRequest, sign_params


def _settings(**overrides) -> Settings:
    values = dict(
        CLOUDINARY_CLOUD_NAME="demo",
        CLOUDINARY_API_KEY="key123",
        CLOUDINARY_API_SECRET="secret",
    )
    values.update(overrides)
    return Settings(**values)


def _client(handler, **overrides):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return CloudinaryClient(_settings(**overrides), http_client=http)


def _image():
    return UploadRequest(filename="cat.jpg", content_type="image/jpeg", content=b"\xff\xd8\xff")


def test_sign_params_sorts_keys_and_appends_secret():
    expected = hashlib.sha1(b"folder=products&timestamp=100secret").hexdigest()
    assert sign_params({"timestamp": 100, "folder": "products"}, "secret") == expected


def test_missing_configuration_is_rejected():
    with pytest.raises(MediaHostError):
        CloudinaryClient(_settings(CLOUDINARY_API_SECRET=""))


def test_upload_posts_signed_form_and_returns_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json={
            "public_id": "products/abc",
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/products/abc.jpg",
        })

    outcome = asyncio.run(_client(handler).upload(_image()))

    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    for field in (b'name="signature"', b'name="api_key"', b'name="folder"', b'q_auto,f_auto', b'filename="cat.jpg"'):
        assert field in seen["body"]
    assert outcome.success
    assert outcome.public_id == "products/abc"
    assert outcome.url.endswith("abc.jpg")
    assert outcome.error is None


def test_upload_rejection_becomes_failed_outcome():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "Invalid image file"}})

    outcome = asyncio.run(_client(handler).upload(_image()))

    assert not outcome.success
    assert outcome.error == "Invalid image file"
    assert outcome.url is None and outcome.public_id is None


def test_upload_transport_error_is_raised():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(httpx.TransportError):
        asyncio.run(_client(handler).upload(_image()))


def test_delete_accepts_ok_and_not_found():
    results = iter(["ok", "not found"])
    calls = []

    def handler(request):
        calls.append(request.read())
        return httpx.Response(200, json={"result": next(results)})

    client = _client(handler)
    asyncio.run(client.delete("products/a"))
    asyncio.run(client.delete("products/b"))

    assert len(calls) == 2
    assert b"products%2Fa" in calls[0] or b"products/a" in calls[0]


def test_delete_error_raises():
    def handler(request):
        return httpx.Response(500, json={"error": {"message": "Internal error"}})

    with pytest.raises(MediaHostError, match="Internal error"):
        asyncio.run(_client(handler).delete("products/a"))


def test_delete_without_public_id_is_noop():
    def handler(request):
        raise AssertionError("no request expected")

    asyncio.run(_client(handler).delete(""))
