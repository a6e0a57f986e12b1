"""Tests for the greyscale HTTP service."""

import base64
import io
from typing import List

from fastapi.testclient import TestClient
from PIL import Image
from pydantic import BaseModel

from greyscaler.config import settings
from greyscaler.service import BaseProcessor, GreyscaleProcessor, StatelessAction, create_app


def _client() -> TestClient:
    return TestClient(create_app(GreyscaleProcessor()))


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def test_health():
    response = _client().get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_greyscale_png(two_pixel_png):
    response = _client().post("/image/greyscale", json={"image_b64": _b64(two_pixel_png)})

    assert response.status_code == 200
    data = response.json()
    assert data["format"] == "png"
    assert (data["width"], data["height"]) == (2, 1)
    with Image.open(io.BytesIO(base64.b64decode(data["image_b64"]))) as image:
        assert image.format == "PNG"
        assert list(image.convert("RGBA").getdata()) == [(124, 124, 124, 255), (18, 18, 18, 0)]


def test_greyscale_raw_keeps_format(photo_jpeg):
    response = _client().post("/image/greyscale/raw", json={"image_b64": _b64(photo_jpeg)})

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    with Image.open(io.BytesIO(response.content)) as image:
        assert image.format == "JPEG"
        assert image.size == (24, 16)


def test_invalid_base64():
    response = _client().post("/image/greyscale", json={"image_b64": "***not base64***"})

    assert response.status_code == 400


def test_unrecognized_image_is_415():
    response = _client().post("/image/greyscale", json={"image_b64": _b64(b"hello world")})

    assert response.status_code == 415
    assert response.json()["error"] == "UnrecognizedFormat"


def test_truncated_image_is_400(noise_png):
    truncated = noise_png[: len(noise_png) // 2]
    response = _client().post("/image/greyscale", json={"image_b64": _b64(truncated)})

    assert response.status_code == 400
    assert response.json()["error"] == "DecodeError"


def test_missing_payload_field_is_422():
    response = _client().post("/image/greyscale", json={})

    assert response.status_code == 422
    assert "detail" in response.json()


class ThresholdPayload(BaseModel):
    """Payload validated again inside the handler."""

    value: int


class StrictProcessor(BaseProcessor):
    """Processor whose handler raises pydantic validation errors."""

    @property
    def name(self) -> str:
        return "strict"

    def get_stateless_actions(self) -> List[StatelessAction]:
        return [
            StatelessAction(
                name="check",
                path="/check",
                request_model=ThresholdPayload,
                handler=self.handle_check,
            ),
            StatelessAction(
                name="ping",
                path="/ping",
                handler=lambda: {"pong": True},
                methods=("GET",),
            ),
        ]

    def handle_check(self, payload: ThresholdPayload):
        ThresholdPayload(value=str(payload.value) + "x")
        return {"value": payload.value}


def test_handler_validation_error_is_400():
    client = TestClient(create_app(StrictProcessor()))

    response = client.post("/check", json={"value": 3})

    assert response.status_code == 400
    assert "Validation error" in response.json()["error"]


def test_action_without_request_model():
    client = TestClient(create_app(StrictProcessor()))

    response = client.get("/ping")

    assert response.status_code == 200
    assert response.json() == {"pong": True}


def test_explicit_workers_are_not_replaced_by_default():
    assert GreyscaleProcessor(workers=0).workers == 0
    assert GreyscaleProcessor(workers=3).workers == 3
    assert GreyscaleProcessor().workers == settings.workers
