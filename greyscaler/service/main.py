"""Entrypoint for the greyscale HTTP service."""

import uvicorn
from fastapi import FastAPI

from ..config import settings
from .api import ServiceConfig, create_app
from .greyscale import GreyscaleProcessor

processor = GreyscaleProcessor()

app: FastAPI = create_app(
    processor,
    ServiceConfig(
        name="greyscale-service",
        description="Converts JPEG, PNG and GIF images to greyscale, preserving transparency.",
    ),
)


def main():
    """Run the greyscale service."""
    uvicorn.run(
        "greyscaler.service.main:app",
        host=settings.service_host,
        port=settings.service_port,
        reload=False,
        log_level=settings.service_log_level,
    )


if __name__ == "__main__":
    main()
