#!/usr/bin/env python3
"""
Convert a JPEG, PNG or GIF image to greyscale, keeping transparency.

Usage:
    greyscaler photo.jpg              # writes photo_greyscale.jpg
    greyscaler --workers 4 scan.png
"""

import argparse
import logging
import sys

from .codec import convert_file
from .config import settings
from .errors import GreyscaleError

logger = logging.getLogger(__name__)

USAGE = "Usage: greyscaler <input_image_filename>\nExample: greyscaler myimage.jpg"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="greyscaler",
        description="Convert an image to greyscale using the luminosity method.",
    )
    parser.add_argument(
        "input_image",
        nargs="?",
        help="Path to the JPEG, PNG or GIF image to convert.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Row bands to convert in parallel (default: GREYSCALER_WORKERS or 1).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.input_image:
        print(USAGE)
        return 1

    workers = args.workers if args.workers is not None else settings.workers
    if workers < 1:
        print(f"Error: --workers must be at least 1, got {workers}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        result = convert_file(args.input_image, workers=workers, progress=print)
    except GreyscaleError as exc:
        logger.debug("Conversion of %s failed", args.input_image, exc_info=True)
        print(str(exc), file=sys.stderr)
        return 1

    logger.debug("Converted %s -> %s (%dx%d)", result.input_path, result.output_path, result.width, result.height)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
