"""Bulk path discovery with similarity-based response deduplication."""
from __future__ import annotations

from importlib import import_module
from typing import Any

from . import utils
from .config import DedupConfig, FetchConfig, OutputConfig

__all__ = [
    "DedupConfig",
    "FetchConfig",
    "OutputConfig",
    "Runner",
    "RunResult",
    "utils",
]


def __getattr__(name: str) -> Any:  # pragma: no cover - import side effect
    if name in {"Runner", "RunResult"}:
        module = import_module(".runner", __name__)
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
