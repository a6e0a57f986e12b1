"""Luminosity greyscale transform."""

from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .pixels import PixelSource, RGBAImage

logger = logging.getLogger(__name__)

LUMA_RED = 0.299
LUMA_GREEN = 0.587
LUMA_BLUE = 0.114


def _round_half_away(value: float) -> int:
    whole = math.floor(value)
    if value - whole >= 0.5:
        whole += 1
    return int(whole)


def luminosity(red: int, green: int, blue: int) -> int:
    """
    Grey intensity of one RGB triple using the luminosity weights.

    The weighted sum is rounded half away from zero and clamped to 255.
    """
    value = LUMA_RED * red + LUMA_GREEN * green + LUMA_BLUE * blue
    return max(0, min(_round_half_away(value), 255))


def _luminosity_band(rgba: np.ndarray) -> np.ndarray:
    """Vectorised :func:`luminosity` over an ``(rows, width, 4)`` block."""
    channels = rgba.astype(np.float64)
    value = LUMA_RED * channels[..., 0] + LUMA_GREEN * channels[..., 1] + LUMA_BLUE * channels[..., 2]
    whole = np.floor(value)
    rounded = np.where(value - whole >= 0.5, whole + 1.0, whole)
    return np.clip(rounded, 0, 255).astype(np.uint8)


def _fill_band(source: np.ndarray, destination: np.ndarray, start: int, stop: int) -> None:
    band = source[start:stop]
    grey = _luminosity_band(band)
    destination[start:stop, :, 0] = grey
    destination[start:stop, :, 1] = grey
    destination[start:stop, :, 2] = grey
    destination[start:stop, :, 3] = band[..., 3]


def _row_bands(height: int, workers: int) -> list[tuple[int, int]]:
    count = min(workers, height)
    step, extra = divmod(height, count)
    bands = []
    start = 0
    for index in range(count):
        stop = start + step + (1 if index < extra else 0)
        bands.append((start, stop))
        start = stop
    return bands


def to_greyscale(source: PixelSource, workers: int = 1) -> RGBAImage:
    """
    Return a new image whose RGB channels hold the luminosity grey of ``source``.

    Alpha is copied unchanged. ``source`` is only read. With ``workers > 1`` the
    rows are split into contiguous bands, each written by one thread into its own
    slice of the destination.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    pixels = source.rgba_array()
    height, width = pixels.shape[:2]
    destination = np.empty((height, width, 4), dtype=np.uint8)
    if height == 0 or width == 0:
        return RGBAImage(destination)

    if workers == 1 or height == 1:
        _fill_band(pixels, destination, 0, height)
    else:
        bands = _row_bands(height, workers)
        logger.debug("Converting %dx%d image in %d row bands", width, height, len(bands))
        with ThreadPoolExecutor(max_workers=len(bands)) as executor:
            futures = [executor.submit(_fill_band, pixels, destination, start, stop) for start, stop in bands]
            for future in futures:
                future.result()

    return RGBAImage(destination)
