"""Exceptions raised by the greyscale conversion pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .formats import ImageFormat


class GreyscaleError(Exception):
    """Base class for every failure in the decode/transform/encode pipeline."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class FileOpenError(GreyscaleError):
    """Input path does not exist or cannot be read."""


class UnrecognizedFormat(GreyscaleError):
    """Stream is not an image, or is one outside JPEG/PNG/GIF."""

    def __init__(self, message: str, path: str | None = None, detected: str | None = None):
        super().__init__(message, path)
        self.detected = detected


class DecodeError(GreyscaleError):
    """Header matched a supported format but the body is corrupt or truncated."""


class FileCreateError(GreyscaleError):
    """Output path cannot be created."""


class EncodeError(GreyscaleError):
    """Serialisation failed; the output file may be empty or partial."""


class UnsupportedFormat(EncodeError):
    """Encode was asked for a format with no serializer."""

    def __init__(self, image_format: "ImageFormat", path: str | None = None):
        super().__init__(f"unsupported output format: {image_format}", path)
        self.image_format = image_format
