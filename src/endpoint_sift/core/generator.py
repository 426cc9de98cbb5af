"""Building the path x host request set."""
from __future__ import annotations

import logging
import queue
from typing import Iterable, Iterator, Sequence
from urllib.parse import urlparse, urlunparse

from ..config import FetchConfig
from .models import END_OF_QUEUE, Request

logger = logging.getLogger(__name__)


def split_host(host: str) -> tuple[str, str]:
    """Split a host entry into the bare host and any path prefix it carries.

    Raises ``ValueError`` for entries that cannot be parsed as URLs.
    """
    parsed = urlparse(host)
    # touching .port validates the authority part as well
    parsed.port
    prefix = parsed.path
    bare = urlunparse(parsed._replace(path=""))
    return bare, prefix


def generate_requests(
    paths: Sequence[str], hosts: Sequence[str], config: FetchConfig
) -> Iterator[Request]:
    """Yield one request per path and host, paths outermost, in input order."""
    for path in paths:
        for host in hosts:
            try:
                bare, prefix = split_host(host)
            except ValueError as exc:
                logger.error("Failed to parse host %r: %s", host, exc)
                continue
            yield Request(
                method=config.method,
                host=bare,
                path=prefix + path,
                headers=tuple(config.headers),
                follow_redirects=config.follow_redirects,
                timeout=config.timeout,
            )


def feed(requests_queue: queue.Queue, requests: Iterable[Request], workers: int) -> int:
    """Put every request on the queue, then one terminator per worker."""
    emitted = 0
    for request in requests:
        requests_queue.put(request)
        emitted += 1
    for _ in range(workers):
        requests_queue.put(END_OF_QUEUE)
    return emitted


__all__ = ["feed", "generate_requests", "split_host"]
