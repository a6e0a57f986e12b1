"""Container format tags shared by the decoder and the encoder dispatch."""

from enum import Enum


class ImageFormat(str, Enum):
    """Container format detected on decode and reused on encode."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_pillow(cls, name: str | None) -> "ImageFormat":
        """Map Pillow's ``Image.format`` name to a tag, ``UNKNOWN`` if unsupported."""
        if not name:
            return cls.UNKNOWN
        return _PILLOW_NAMES.get(name.upper(), cls.UNKNOWN)

    @property
    def is_supported(self) -> bool:
        return self is not ImageFormat.UNKNOWN

    @property
    def pillow_name(self) -> str | None:
        return _SAVE_NAMES.get(self)

    @property
    def media_type(self) -> str:
        if self is ImageFormat.UNKNOWN:
            return "application/octet-stream"
        return f"image/{self.value}"


# Pillow reports multi-picture JPEGs (common from phone cameras) as MPO.
_PILLOW_NAMES = {
    "JPEG": ImageFormat.JPEG,
    "MPO": ImageFormat.JPEG,
    "PNG": ImageFormat.PNG,
    "GIF": ImageFormat.GIF,
}

_SAVE_NAMES = {
    ImageFormat.JPEG: "JPEG",
    ImageFormat.PNG: "PNG",
    ImageFormat.GIF: "GIF",
}

SUPPORTED_FORMATS = (ImageFormat.JPEG, ImageFormat.PNG, ImageFormat.GIF)
