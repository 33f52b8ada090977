import base64

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from profile_enhancer.enhancement.errors import InvalidAPIKeyError, NoImageError
from profile_enhancer.service import app, get_image_client

from .conftest import FakeImageClient


@pytest.fixture
def client_with():
    def _make(fake):
        app.dependency_overrides[get_image_client] = lambda: fake
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_health(client_with):
    resp = client_with(FakeImageClient()).get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_index_page(client_with):
    resp = client_with(FakeImageClient()).get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "Professional Profile Picture Editor" in resp.text


def test_options(client_with):
    resp = client_with(FakeImageClient()).get("/v1/photo/options")
    assert resp.json() == {
        "background_styles": ["Office", "Modern", "Textured", "AI Choice"],
        "defaults": {"background_style": "AI Choice", "adjust_brightness": True, "smooth_skin": True},
    }


def test_enhance_upload(client_with, png_bytes):
    fake = FakeImageClient()
    resp = client_with(fake).post(
        "/v1/photo/enhance",
        files={"file": ("me.png", png_bytes, "image/png")},
        data={"background_style": "Office", "adjust_brightness": "false", "smooth_skin": "true"},
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "success"
    assert body["result"]["image"] == "data:image/png;base64,ABC123"

    b64, mime_type, options = fake.calls[0]
    assert base64.b64decode(b64) == png_bytes
    assert mime_type == "image/png"
    assert options.background_style == "Office"
    assert options.adjust_brightness is False
    assert options.smooth_skin is True


def test_enhance_sniffs_undeclared_image(client_with, png_bytes):
    fake = FakeImageClient()
    resp = client_with(fake).post(
        "/v1/photo/enhance",
        files={"file": ("me.bin", png_bytes, "application/octet-stream")},
    )

    assert resp.json()["status"] == "success"
    assert fake.calls[0][1] == "image/png"


def test_enhance_rejects_non_image(client_with):
    fake = FakeImageClient()
    resp = client_with(fake).post(
        "/v1/photo/enhance",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please upload a valid image file (PNG, JPG, etc.)."
    assert fake.calls == []


def test_enhance_empty_image(client_with):
    fake = FakeImageClient()
    resp = client_with(fake).post(
        "/v1/photo/enhance",
        files={"file": ("empty.png", b"", "image/png")},
    )

    assert resp.json() == {
        "status": "error",
        "error_type": "encoding",
        "message": "Failed to convert file to base64 string.",
    }
    assert fake.calls == []


@pytest.mark.parametrize("error", [NoImageError(), InvalidAPIKeyError()])
def test_enhance_classified_errors(client_with, png_bytes, error):
    resp = client_with(FakeImageClient(error=error)).post(
        "/v1/photo/enhance",
        files={"file": ("me.png", png_bytes, "image/png")},
    )

    assert resp.json() == {
        "status": "error",
        "error_type": error.error_type,
        "message": error.message,
    }


def test_enhance_hides_unexpected_errors(client_with, png_bytes):
    fake = FakeImageClient(error=RuntimeError("secret internals"))
    resp = client_with(fake).post(
        "/v1/photo/enhance",
        files={"file": ("me.png", png_bytes, "image/png")},
    )

    body = resp.json()
    assert body["status"] == "error"
    assert body["error_type"] == "processing_error"
    assert "secret internals" not in resp.text


def test_enhance_base64_data_uri(client_with, png_bytes):
    fake = FakeImageClient()
    data_uri = "data:image/png;base64," + base64.b64encode(png_bytes).decode()
    resp = client_with(fake).post(
        "/v1/photo/enhance/base64",
        json={"image": data_uri, "options": {"background_style": "Textured", "smooth_skin": False}},
    )

    assert resp.json()["status"] == "success"
    b64, mime_type, options = fake.calls[0]
    assert base64.b64decode(b64) == png_bytes
    assert mime_type == "image/png"
    assert options.background_style == "Textured"
    assert options.adjust_brightness is True
    assert options.smooth_skin is False


def test_enhance_base64_malformed(client_with):
    fake = FakeImageClient()
    resp = client_with(fake).post("/v1/photo/enhance/base64", json={"image": "data:image/png;base64,"})

    assert resp.json()["error_type"] == "encoding"
    assert fake.calls == []


def test_lifespan_builds_client_from_env(monkeypatch):
    monkeypatch.setenv("API_KEY", "env-key")
    monkeypatch.setenv("IMAGE_GEN_MODEL", "gemini-test")
    app.dependency_overrides.clear()

    with TestClient(app) as client:
        image_client = client.app.state.image_client
        assert image_client.api_key == "env-key"
        assert image_client.model == "gemini-test"
        assert client.get("/health").status_code == 200


def test_enhance_keeps_payload_intact_with_comma_in_mime_type(client_with):
    fake = FakeImageClient()
    data = b"\x89PNG payload"
    resp = client_with(fake).post(
        "/v1/photo/enhance",
        files={"file": ("me.png", data, "image/png,x")},
    )

    assert resp.json()["status"] == "success"
    assert base64.b64decode(fake.calls[0][0]) == data


def test_enhance_oversized_undeclared_upload_is_rejected(client_with, monkeypatch):
    def too_big(*args, **kwargs):
        raise Image.DecompressionBombError("image too large")

    monkeypatch.setattr(Image, "open", too_big)
    fake = FakeImageClient()
    resp = client_with(fake).post(
        "/v1/photo/enhance",
        files={"file": ("huge.bin", b"not really huge", "application/octet-stream")},
    )

    assert resp.status_code == 400
    assert fake.calls == []
