"""Processor that converts base64 image payloads to greyscale."""

import asyncio
import base64
import binascii
import logging
from typing import List

from fastapi import HTTPException, Response

from .. import __version__
from ..codec import decode_bytes, encode_bytes
from ..config import settings
from ..formats import ImageFormat
from ..transform import to_greyscale
from .models import GreyscaleRequest, GreyscaleResponse
from .processor import BaseProcessor, StatelessAction

logger = logging.getLogger(__name__)


def _convert(image_bytes: bytes, workers: int) -> tuple[bytes, ImageFormat, int, int]:
    """Decode, convert and re-encode in the detected format."""
    decoded = decode_bytes(image_bytes)
    grey = to_greyscale(decoded.image, workers=workers)
    return encode_bytes(grey, decoded.format), decoded.format, grey.width, grey.height


class GreyscaleProcessor(BaseProcessor):
    """Processor exposing luminosity greyscale conversion."""

    def __init__(self, workers: int | None = None):
        self.workers = settings.workers if workers is None else workers

    @property
    def name(self) -> str:
        return "greyscale"

    @property
    def version(self) -> str:
        return __version__

    def get_stateless_actions(self) -> List[StatelessAction]:
        return [
            StatelessAction(
                name="convert_to_greyscale",
                path="/image/greyscale",
                request_model=GreyscaleRequest,
                response_model=GreyscaleResponse,
                handler=self.handle_greyscale,
                summary="Convert a base64 image to greyscale (base64).",
                description=(
                    "Accepts JPEG, PNG or GIF bytes in base64 form and returns the greyscale "
                    "image, alpha preserved, re-encoded in the same format."
                ),
                tags=("image",),
            ),
            StatelessAction(
                name="convert_to_greyscale_raw",
                path="/image/greyscale/raw",
                request_model=GreyscaleRequest,
                handler=self.handle_greyscale_raw,
                summary="Convert a base64 image to greyscale and return the encoded bytes.",
                tags=("image",),
            ),
        ]

    async def _run(self, request: GreyscaleRequest) -> tuple[bytes, ImageFormat, int, int]:
        try:
            image_bytes = base64.b64decode(request.image_b64, validate=True)
        except binascii.Error as exc:
            raise HTTPException(status_code=400, detail=f"Invalid base64 image payload: {exc}") from exc

        # Pillow and numpy work is blocking; keep it off the event loop.
        result = await asyncio.to_thread(_convert, image_bytes, self.workers)
        logger.info("Converted %s image %dx%d", result[1], result[2], result[3])
        return result

    async def handle_greyscale(self, request: GreyscaleRequest) -> GreyscaleResponse:
        encoded, image_format, width, height = await self._run(request)
        return GreyscaleResponse(
            image_b64=base64.b64encode(encoded).decode("ascii"),
            format=image_format,
            width=width,
            height=height,
        )

    async def handle_greyscale_raw(self, request: GreyscaleRequest) -> Response:
        encoded, image_format, _, _ = await self._run(request)
        return Response(content=encoded, media_type=image_format.media_type)
