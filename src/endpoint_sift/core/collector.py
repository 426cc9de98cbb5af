"""Single consumer of fetch results: filtering, dedup, persistence, index."""
from __future__ import annotations

import hashlib
import logging
import queue
from pathlib import Path
from typing import IO, Optional

from ..config import OutputConfig
from .dedup import DedupStore
from .models import END_OF_QUEUE, NOT_SAVED, CollectorStats, Response

logger = logging.getLogger(__name__)


def bucket_dir(output_dir: Path, response: Response) -> Path:
    return output_dir / (response.request.hostname or "unknown-host") / response.bucket


def index_line(saved_path: str, response: Response) -> str:
    return f"{saved_path} {response.request.url} ({response.status})\n"


class ResultCollector:
    """Consumes responses one at a time and records every outcome in the index.

    Only this object reads and writes bucket directories, which is why the
    dedup scan needs no locking.
    """

    def __init__(
        self,
        config: OutputConfig,
        store: DedupStore,
        index: IO[str],
        *,
        echo: Optional[IO[str]] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.index = index
        self.echo = echo
        self.output_dir = Path(config.output_dir)
        self.stats = CollectorStats()

    def run(self, results: queue.Queue) -> CollectorStats:
        while True:
            response = results.get()
            if response is END_OF_QUEUE:
                return self.stats
            try:
                self.handle(response)
            except Exception:
                self.stats.failed += 1
                logger.exception("Failed to process response for %s", response.request.url)

    def handle(self, response: Response) -> Optional[str]:
        """Process one response; returns the index line written, if any."""
        if self.config.save_status and response.status_code not in self.config.save_status:
            self.stats.filtered += 1
            return None
        if response.error is not None:
            self.stats.failed += 1
            logger.error("Request failed: %s", response.error)
            return None

        directory = bucket_dir(self.output_dir, response)
        content = response.content(self.config.no_headers)
        saved_path = NOT_SAVED
        if self.store.admit(directory, content, response.request.url):
            written = self._save(directory, content)
            if written is not None:
                saved_path = str(written)
                self.stats.saved += 1
            else:
                self.stats.failed += 1
        else:
            self.stats.duplicates += 1

        line = index_line(saved_path, response)
        self._write_index(line)
        self.stats.indexed += 1
        if self.echo is not None and self.config.verbose:
            self.echo.write(line)
        return line

    def _save(self, directory: Path, content: bytes) -> Optional[Path]:
        target = directory / hashlib.sha1(content).hexdigest()
        try:
            directory.mkdir(parents=True, exist_ok=True, mode=0o750)
            target.write_bytes(content)
        except OSError as exc:
            logger.error("Failed to save file %s: %s", target, exc)
            return None
        return target

    def _write_index(self, line: str) -> None:
        try:
            self.index.write(line)
            self.index.flush()
        except OSError as exc:
            logger.error("Failed to append to index: %s", exc)


__all__ = ["ResultCollector", "bucket_dir", "index_line"]
