"""Shared fixtures: small images built in memory with Pillow."""

import io
import struct
import zlib

import numpy as np
import pytest
from PIL import Image


def encode_pillow(image: Image.Image, fmt: str, **options) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt, **options)
    return buffer.getvalue()


def rgba_pillow(width: int, height: int, pixels) -> Image.Image:
    image = Image.new("RGBA", (width, height))
    image.putdata([tuple(p) for p in pixels])
    return image


def _png_chunk(kind: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", len(payload)) + kind + payload + struct.pack(">I", zlib.crc32(kind + payload))


def build_png(width: int, height: int, bit_depth: int, color_type: int, rows: list[bytes], extra=()) -> bytes:
    """Assemble a PNG by hand, for headers Pillow would not write itself."""
    header = struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, 0)
    data = zlib.compress(b"".join(b"\x00" + row for row in rows))
    chunks = [_png_chunk(b"IHDR", header)]
    chunks += [_png_chunk(kind, payload) for kind, payload in extra]
    chunks += [_png_chunk(b"IDAT", data), _png_chunk(b"IEND", b"")]
    return b"\x89PNG\r\n\x1a\n" + b"".join(chunks)


@pytest.fixture
def two_pixel_png() -> bytes:
    """2x1 PNG: one opaque orange-ish pixel, one fully transparent dark pixel."""
    return encode_pillow(rgba_pillow(2, 1, [(200, 100, 50, 255), (10, 20, 30, 0)]), "PNG")


@pytest.fixture
def noise_rgba() -> np.ndarray:
    rng = np.random.default_rng(4471)
    return rng.integers(0, 256, size=(13, 17, 4), dtype=np.uint8)


@pytest.fixture
def noise_png(noise_rgba) -> bytes:
    return encode_pillow(Image.fromarray(noise_rgba), "PNG")


@pytest.fixture
def photo_jpeg() -> bytes:
    gradient = np.zeros((16, 24, 3), dtype=np.uint8)
    gradient[..., 0] = np.linspace(0, 255, 24, dtype=np.uint8)
    gradient[..., 1] = 128
    gradient[..., 2] = np.linspace(255, 0, 16, dtype=np.uint8)[:, np.newaxis]
    return encode_pillow(Image.fromarray(gradient), "JPEG", quality=95)


@pytest.fixture
def palette_gif() -> bytes:
    image = Image.new("P", (4, 3))
    image.putpalette([255, 0, 0, 0, 255, 0, 0, 0, 255] + [0] * (256 * 3 - 9))
    image.putdata([0, 1, 2, 0, 1, 2, 0, 1, 2, 0, 1, 2])
    return encode_pillow(image, "GIF")
