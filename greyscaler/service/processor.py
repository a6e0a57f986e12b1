"""Processor contract: a named set of request/response actions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List

from pydantic import BaseModel


@dataclass
class StatelessAction:
    """
    One HTTP route served by a processor method.

    Attributes:
        name: Identifier used in logs and the OpenAPI operation.
        path: Route path, e.g. "/image/greyscale".
        handler: Called with the validated request model, or with no arguments
            when ``request_model`` is None. May be sync or async.
        request_model: Pydantic model the JSON body is validated against.
        response_model: Pydantic model used to serialise the result.
        methods: HTTP methods routed to the handler.
        summary, description, tags: OpenAPI metadata.
    """

    name: str
    path: str
    handler: Callable[..., Awaitable[Any] | Any]
    request_model: type[BaseModel] | None = None
    response_model: type[BaseModel] | None = None
    methods: tuple[str, ...] = ("POST",)
    summary: str | None = None
    description: str | None = None
    tags: tuple[str, ...] | None = None


class BaseProcessor(ABC):
    """Something that keeps no state between requests and exposes actions."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name used for the API title and logging."""

    @property
    def version(self) -> str:
        return "1.0.0"

    def get_stateless_actions(self) -> List[StatelessAction]:
        """Routes to register; an empty list leaves only the health endpoints."""
        return []
