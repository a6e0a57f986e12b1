"""Decoding, encoder dispatch and the file-to-file conversion pipeline."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Optional

from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, EncodeError, FileCreateError, FileOpenError, UnrecognizedFormat, UnsupportedFormat
from .formats import ImageFormat
from .paths import output_path_for
from .pixels import RGBAImage
from .transform import to_greyscale

logger = logging.getLogger(__name__)

JPEG_QUALITY = 90


@dataclass(frozen=True)
class DecodedImage:
    """
    A decoded image together with the container format it was read from.

    Attributes:
        image: Pixels normalised to 8-bit RGBA.
        format: Format detected from the stream contents.
        frames: Frame count reported by the container; only the first is decoded.
    """

    image: RGBAImage
    format: ImageFormat
    frames: int = 1


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of :func:`convert_file`."""

    input_path: str
    output_path: str
    format: ImageFormat
    width: int
    height: int


def _where(path: Optional[str]) -> str:
    return f" {path}" if path else ""


def decode(stream: BinaryIO, path: Optional[str] = None) -> DecodedImage:
    """
    Decode an image stream, detecting its format from the content.

    Raises:
        UnrecognizedFormat: stream is not an image, or not JPEG/PNG/GIF.
        DecodeError: header is valid but the image data cannot be loaded.
    """
    try:
        picture = Image.open(stream)
    except UnidentifiedImageError as exc:
        raise UnrecognizedFormat(f"Error decoding image{_where(path)}: unrecognized image format", path) from exc
    except Image.DecompressionBombError as exc:
        raise DecodeError(f"Error decoding image{_where(path)}: {exc}", path) from exc

    with picture:
        image_format = ImageFormat.from_pillow(picture.format)
        if not image_format.is_supported:
            raise UnrecognizedFormat(
                f"Unsupported input image format{_where(path)}: {picture.format}. "
                "Supported formats are JPEG, PNG, GIF.",
                path,
                detected=picture.format,
            )
        try:
            frames = getattr(picture, "n_frames", 1)
            picture.seek(0)
            picture.load()
            pixels = RGBAImage.from_pillow(picture)
        except (OSError, SyntaxError, ValueError, EOFError) as exc:
            raise DecodeError(f"Error decoding image{_where(path)}: {exc}", path) from exc

    logger.debug("Decoded %s image %dx%d (%d frame(s))", image_format, pixels.width, pixels.height, frames)
    return DecodedImage(image=pixels, format=image_format, frames=frames)


def decode_bytes(data: bytes, path: Optional[str] = None) -> DecodedImage:
    return decode(io.BytesIO(data), path)


def _encode_jpeg(sink: BinaryIO, picture: Image.Image) -> None:
    # JPEG has no alpha channel; only the colour planes are written.
    picture.convert("RGB").save(sink, format=ImageFormat.JPEG.pillow_name, quality=JPEG_QUALITY)


def _encode_png(sink: BinaryIO, picture: Image.Image) -> None:
    picture.save(sink, format=ImageFormat.PNG.pillow_name)


def _encode_gif(sink: BinaryIO, picture: Image.Image) -> None:
    # Pillow quantises to a palette with its default algorithm.
    picture.save(sink, format=ImageFormat.GIF.pillow_name)


_ENCODERS: dict[ImageFormat, Callable[[BinaryIO, Image.Image], None]] = {
    ImageFormat.JPEG: _encode_jpeg,
    ImageFormat.PNG: _encode_png,
    ImageFormat.GIF: _encode_gif,
}


def encode(sink: BinaryIO, image: RGBAImage, image_format: ImageFormat, path: Optional[str] = None) -> None:
    """
    Serialise ``image`` to ``sink`` in ``image_format``.

    Raises:
        UnsupportedFormat: no serializer exists for ``image_format``.
        EncodeError: the format library failed while writing.
    """
    encoder = _ENCODERS.get(image_format)
    if encoder is None:
        raise UnsupportedFormat(image_format, path)
    try:
        encoder(sink, image.to_pillow())
    except (OSError, ValueError) as exc:
        raise EncodeError(
            f"Error encoding greyscale image{_where(path)} (format: {image_format}): {exc}", path
        ) from exc


def encode_bytes(image: RGBAImage, image_format: ImageFormat) -> bytes:
    buffer = io.BytesIO()
    encode(buffer, image, image_format)
    return buffer.getvalue()


def read_image(path: str) -> DecodedImage:
    """Open and decode the image at ``path``."""
    try:
        stream = open(path, "rb")
    except OSError as exc:
        raise FileOpenError(f"Error opening input file {path}: {exc}", path) from exc
    with stream:
        return decode(stream, path)


def write_image(path: str, image: RGBAImage, image_format: ImageFormat) -> None:
    """Create ``path`` and encode ``image`` into it."""
    try:
        sink = open(path, "wb")
    except OSError as exc:
        raise FileCreateError(f"Error creating output file {path}: {exc}", path) from exc
    with sink:
        encode(sink, image, image_format, path)
    logger.debug("Wrote %s image to %s", image_format, path)


def convert_file(
    input_path: str,
    workers: int = 1,
    progress: Optional[Callable[[str], None]] = None,
) -> ConversionResult:
    """
    Convert the image at ``input_path`` to greyscale next to the original.

    The output keeps the input's container format and is named with a
    ``_greyscale`` suffix before the extension. ``progress`` receives the
    human-readable status lines.
    """
    report = progress or (lambda message: None)

    decoded = read_image(input_path)
    report(f"Converting {input_path} (format: {decoded.format}) to greyscale (Luminosity Method)...")
    grey = to_greyscale(decoded.image, workers=workers)
    report("Conversion complete.")

    output_path = output_path_for(input_path)
    write_image(output_path, grey, decoded.format)
    report(f"Greyscale image saved as {output_path}")

    return ConversionResult(
        input_path=input_path,
        output_path=output_path,
        format=decoded.format,
        width=grey.width,
        height=grey.height,
    )
