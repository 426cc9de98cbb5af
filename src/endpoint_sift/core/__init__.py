"""Fetch pipeline and response deduplication building blocks."""
from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "Comparer",
    "DedupStore",
    "Fetcher",
    "WorkerPool",
    "ResultCollector",
    "generate_requests",
    "strip_transport_headers",
    "Request",
    "Response",
    "MarkupProfile",
    "CollectorStats",
]

_LOCATIONS = {
    "Comparer": ".comparer",
    "DedupStore": ".dedup",
    "Fetcher": ".fetcher",
    "WorkerPool": ".fetcher",
    "ResultCollector": ".collector",
    "generate_requests": ".generator",
    "strip_transport_headers": ".headers",
    "Request": ".models",
    "Response": ".models",
    "MarkupProfile": ".models",
    "CollectorStats": ".models",
}


def __getattr__(name: str) -> Any:  # pragma: no cover - import side effects
    location = _LOCATIONS.get(name)
    if location is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    module = import_module(location, __name__)
    return getattr(module, name)
