"""Stateless HTTP surface for greyscale conversion."""

from .api import ServiceConfig, create_app
from .greyscale import GreyscaleProcessor
from .processor import BaseProcessor, StatelessAction

__all__ = [
    "BaseProcessor",
    "StatelessAction",
    "create_app",
    "ServiceConfig",
    "GreyscaleProcessor",
]
