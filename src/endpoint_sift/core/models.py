"""Core dataclasses representing requests and captured responses."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlparse

NOT_SAVED = "NOT-SAVED"
UNKNOWN_BUCKET = "XXX"

# queue terminator shared by the generator, the workers and the collector
END_OF_QUEUE = object()


@dataclass(frozen=True, slots=True)
class Request:
    method: str
    host: str
    path: str
    headers: tuple[str, ...] = tuple()
    follow_redirects: bool = False
    timeout: float = 10.0

    @property
    def url(self) -> str:
        return self.host + self.path

    @property
    def hostname(self) -> str:
        return urlparse(self.host).hostname or ""


@dataclass(slots=True)
class Response:
    request: Request
    status: str = ""
    status_code: int = 0
    proto: str = "HTTP/1.1"
    headers: list[str] = field(default_factory=list)
    body: bytes = b""
    error: Optional[str] = None

    @property
    def bucket(self) -> str:
        if len(self.status) >= 3:
            return self.status[:3]
        return UNKNOWN_BUCKET

    def transcript(self) -> bytes:
        """Render the full capture: request line, status line, headers and body."""
        lines = [self.request.url, ""]
        lines.append(f"> {self.request.method} {self.request.path} HTTP/1.1")
        lines.extend(f"> {header}" for header in self.request.headers)
        lines.append("")
        lines.append(f"< {self.proto} {self.status}")
        lines.extend(f"< {header}" for header in self.headers)
        lines.append("")
        head = "\n".join(lines) + "\n"
        return head.encode("utf-8", errors="replace") + self.body

    def content(self, no_headers: bool = False) -> bytes:
        if no_headers:
            return self.body
        return self.transcript()


@dataclass(slots=True)
class MarkupProfile:
    tags: tuple[str, ...]
    classes: str

    @property
    def is_markup(self) -> bool:
        return bool(self.tags)


@dataclass(slots=True)
class CollectorStats:
    saved: int = 0
    duplicates: int = 0
    failed: int = 0
    filtered: int = 0
    indexed: int = 0
