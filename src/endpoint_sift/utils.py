"""Input helpers for path and host lists."""
from __future__ import annotations

from pathlib import Path


def is_file(path: str) -> bool:
    return Path(path).is_file()


def read_lines(filename: str) -> list[str]:
    with open(filename, encoding="utf-8", errors="replace") as handle:
        return [line.rstrip("\r\n") for line in handle]


def read_lines_or_literal(arg: str, default: str) -> list[str]:
    """Read ``arg`` as a line list, or treat it as a single literal entry.

    A value that is not a regular file is taken literally unless it is the
    default location, in which case ``FileNotFoundError`` is raised.
    """
    if is_file(arg):
        return read_lines(arg)
    if arg == default:
        raise FileNotFoundError(f"file {arg} not found")
    return [arg]
