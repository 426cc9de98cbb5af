"""Adapter protocol definitions for injectable dependencies."""
from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..core.models import Request, Response


@runtime_checkable
class Requester(Protocol):
    """Performs one request and always returns a response, even on failure."""

    def __call__(self, request: Request) -> Response:
        ...


@runtime_checkable
class HostLimiter(Protocol):
    """Blocks until a request to ``host`` may be dispatched."""

    def admit(self, host: str) -> None:
        ...


__all__ = ["HostLimiter", "Requester"]
