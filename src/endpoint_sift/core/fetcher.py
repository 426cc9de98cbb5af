"""HTTP fetching and the worker pool that drives it."""
from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

import requests

from ..adapters import HostLimiter, Requester
from ..config import FetchConfig
from .models import END_OF_QUEUE, Request, Response

logger = logging.getLogger(__name__)

_PROTOCOL_VERSIONS = {9: "HTTP/0.9", 10: "HTTP/1.0", 11: "HTTP/1.1", 20: "HTTP/2"}


def parse_header(line: str) -> tuple[str, str] | None:
    name, sep, value = line.partition(":")
    if not sep or not name.strip():
        return None
    return name.strip(), value.strip()


class Fetcher:
    """Issues requests with one ``requests.Session`` per worker thread."""

    def __init__(self, config: FetchConfig, session_factory=requests.Session) -> None:
        self.config = config
        self._session_factory = session_factory
        self._local = threading.local()
        self._lock = threading.Lock()
        self._sessions: list[requests.Session] = []

    def __call__(self, request: Request) -> Response:
        return self.fetch(request)

    def fetch(self, request: Request) -> Response:
        session = self._session()
        try:
            resp = session.request(
                request.method,
                request.url,
                headers=self._headers(request),
                timeout=request.timeout,
                allow_redirects=request.follow_redirects,
                verify=self.config.verify_tls,
            )
        except (requests.RequestException, ValueError) as exc:
            return Response(request=request, error=f"{request.url}: {exc}")
        version = getattr(getattr(resp, "raw", None), "version", 11)
        return Response(
            request=request,
            status=f"{resp.status_code} {resp.reason or ''}".strip(),
            status_code=resp.status_code,
            proto=_PROTOCOL_VERSIONS.get(version, "HTTP/1.1"),
            headers=[f"{name}: {value}" for name, value in resp.headers.items()],
            body=resp.content or b"",
        )

    def _headers(self, request: Request) -> dict[str, str]:
        headers: dict[str, str] = {}
        for line in request.headers:
            parsed = parse_header(line)
            if parsed is None:
                logger.warning("Ignoring malformed header %r", line)
                continue
            name, value = parsed
            headers[name] = value
        if not any(name.lower() == "user-agent" for name in headers):
            headers["User-Agent"] = self.config.user_agent
        return headers

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def close(self) -> None:
        """Close every session opened so far; later calls open fresh ones."""
        with self._lock:
            sessions, self._sessions = self._sessions, []
            self._local = threading.local()
        for session in sessions:
            session.close()


class WorkerPool:
    """Fixed set of workers moving requests to responses between two queues."""

    def __init__(
        self,
        requester: Requester,
        concurrency: int = 1,
        *,
        limiter: Optional[HostLimiter] = None,
    ) -> None:
        self.requester = requester
        self.concurrency = max(1, concurrency)
        self.limiter = limiter
        self.requests: queue.Queue = queue.Queue(maxsize=1)
        self.results: queue.Queue = queue.Queue(maxsize=1)

    def work(self) -> int:
        """Worker loop; returns the number of requests handled once stopped."""
        handled = 0
        while True:
            request = self.requests.get()
            if request is END_OF_QUEUE:
                return handled
            try:
                if self.limiter is not None:
                    self.limiter.admit(request.hostname)
                response = self.requester(request)
            except Exception as exc:
                logger.exception("Request failed for %s", request.url)
                response = Response(request=request, error=f"{request.url}: {exc}")
            self.results.put(response)
            handled += 1


__all__ = ["Fetcher", "WorkerPool", "parse_header"]
