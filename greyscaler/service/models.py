"""Request and response models for the greyscale service."""

from pydantic import BaseModel, Field

from ..formats import ImageFormat


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    version: str = Field(default="1.0.0")


class ErrorResponse(BaseModel):
    """Error response envelope."""

    error: str = Field(..., description="High-level error message")
    detail: str | None = Field(None, description="Additional context for debugging")


class GreyscaleRequest(BaseModel):
    """Incoming payload that carries a base64 encoded image."""

    image_b64: str = Field(..., description="Base64 encoded JPEG, PNG or GIF bytes.")


class GreyscaleResponse(BaseModel):
    """Greyscale image re-encoded in the format the input was detected as."""

    image_b64: str = Field(..., description="Base64 encoded greyscale image bytes.")
    format: ImageFormat = Field(..., description="Container format of both input and output.")
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
