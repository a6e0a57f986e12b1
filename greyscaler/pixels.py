"""Pixel-addressable images backed by an 8-bit RGBA arena."""

from __future__ import annotations

from typing import Iterable, Protocol, Sequence, Tuple, runtime_checkable

import numpy as np
from PIL import Image

RGBA = Tuple[int, int, int, int]

# Modes Pillow uses for 16-bit greyscale data; reduced to 8 bits by keeping the high byte.
_WIDE_GREY_MODES = ("I;16", "I;16L", "I;16B", "I;16N", "I")


@runtime_checkable
class PixelSource(Protocol):
    """Anything that can be read as normalised 8-bit RGBA by coordinate."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def rgba_at(self, x: int, y: int) -> RGBA: ...

    def rgba_array(self) -> np.ndarray: ...


class RGBAImage:
    """
    Rectangular grid of RGBA pixels that owns its storage.

    Pixels live in a ``(height, width, 4)`` uint8 array addressed as ``[y, x]``.
    Dimensions are fixed at creation.
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 4 or pixels.dtype != np.uint8:
            raise ValueError(
                f"expected a (height, width, 4) uint8 array, got {pixels.shape} {pixels.dtype}"
            )
        self._pixels = pixels

    @classmethod
    def blank(cls, width: int, height: int) -> "RGBAImage":
        if width < 0 or height < 0:
            raise ValueError(f"image dimensions must be non-negative, got {width}x{height}")
        return cls(np.zeros((height, width, 4), dtype=np.uint8))

    @classmethod
    def from_array(cls, array: np.ndarray) -> "RGBAImage":
        """Copy an existing ``(height, width, 4)`` array into a new image."""
        return cls(np.array(array, dtype=np.uint8, copy=True))

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Iterable[Sequence[int]]) -> "RGBAImage":
        """Build an image from row-major RGBA tuples."""
        image = cls.blank(width, height)
        flat = [tuple(pixel) for pixel in pixels]
        if len(flat) != width * height:
            raise ValueError(f"expected {width * height} pixels for {width}x{height}, got {len(flat)}")
        for index, pixel in enumerate(flat):
            image.set_rgba(index % width, index // width, pixel)
        return image

    @classmethod
    def from_pillow(cls, image: Image.Image) -> "RGBAImage":
        """
        Normalise a decoded Pillow image to 8-bit RGBA.

        Palette, greyscale, CMYK and YCbCr images go through Pillow's own
        ``convert("RGBA")`` so that visually identical inputs give identical arrays.
        """
        width, height = image.size
        if width == 0 or height == 0:
            return cls.blank(width, height)
        if image.mode in _WIDE_GREY_MODES:
            wide = np.asarray(image).astype(np.int64)
            grey = np.clip(wide >> 8, 0, 255).astype(np.uint8)
            pixels = np.empty((height, width, 4), dtype=np.uint8)
            pixels[..., :3] = grey[..., np.newaxis]
            transparency = image.info.get("transparency")
            if isinstance(transparency, int):
                pixels[..., 3] = np.where(wide == transparency, 0, 255)
            else:
                pixels[..., 3] = 255
            return cls(pixels)
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return cls.from_array(np.asarray(rgba))

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")

    def rgba_at(self, x: int, y: int) -> RGBA:
        self._check_bounds(x, y)
        r, g, b, a = self._pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def set_rgba(self, x: int, y: int, rgba: Sequence[int]) -> None:
        self._check_bounds(x, y)
        if len(rgba) != 4 or any(not 0 <= int(channel) <= 255 for channel in rgba):
            raise ValueError(f"RGBA channels must be four values in [0, 255], got {tuple(rgba)}")
        self._pixels[y, x] = rgba

    def rgba_array(self) -> np.ndarray:
        """Read-only view of the pixel arena."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def to_pillow(self) -> Image.Image:
        if self.width == 0 or self.height == 0:
            return Image.new("RGBA", self.size)
        return Image.fromarray(self._pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RGBAImage):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._pixels, other._pixels)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"RGBAImage({self.width}x{self.height})"
