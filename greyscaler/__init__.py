"""Luminosity greyscale conversion for JPEG, PNG and GIF images."""

from .codec import (
    JPEG_QUALITY,
    ConversionResult,
    DecodedImage,
    convert_file,
    decode,
    decode_bytes,
    encode,
    encode_bytes,
    read_image,
    write_image,
)
from .errors import (
    DecodeError,
    EncodeError,
    FileCreateError,
    FileOpenError,
    GreyscaleError,
    UnrecognizedFormat,
    UnsupportedFormat,
)
from .formats import SUPPORTED_FORMATS, ImageFormat
from .paths import output_path_for, split_extension
from .pixels import PixelSource, RGBAImage
from .transform import luminosity, to_greyscale

__version__ = "1.0.0"


__all__ = [
    "JPEG_QUALITY",
    "ConversionResult",
    "DecodedImage",
    "convert_file",
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "read_image",
    "write_image",
    "DecodeError",
    "EncodeError",
    "FileCreateError",
    "FileOpenError",
    "GreyscaleError",
    "UnrecognizedFormat",
    "UnsupportedFormat",
    "SUPPORTED_FORMATS",
    "ImageFormat",
    "output_path_for",
    "split_extension",
    "PixelSource",
    "RGBAImage",
    "luminosity",
    "to_greyscale",
]
