"""High-level orchestration for a sifting run."""
from __future__ import annotations

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import IO, Optional

from .adapters import HostLimiter, Requester
from .config import (
    DEFAULT_HOSTS_FILE,
    DEFAULT_PATHS_FILE,
    DedupConfig,
    FetchConfig,
    OutputConfig,
)
from .core.collector import ResultCollector
from .core.comparer import Comparer
from .core.dedup import DedupStore
from .core.fetcher import Fetcher, WorkerPool
from .core.generator import feed, generate_requests
from .core.models import END_OF_QUEUE, CollectorStats
from .throttle import HostRateLimiter
from .utils import read_lines_or_literal

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index"


class StartupError(RuntimeError):
    """Raised when a run cannot start: missing inputs or unusable output."""


@dataclass(frozen=True)
class RunResult:
    requested: int
    handled: int
    stats: CollectorStats
    elapsed: float


def load_inputs(
    paths_arg: str,
    hosts_arg: str,
    *,
    paths_default: str = DEFAULT_PATHS_FILE,
    hosts_default: str = DEFAULT_HOSTS_FILE,
) -> tuple[list[str], list[str]]:
    try:
        paths = read_lines_or_literal(paths_arg, paths_default)
    except OSError as exc:
        raise StartupError(f"failed to open paths file: {exc}") from exc
    try:
        hosts = read_lines_or_literal(hosts_arg, hosts_default)
    except OSError as exc:
        raise StartupError(f"failed to open hosts file: {exc}") from exc
    return paths, hosts


def open_index(output_dir: str) -> IO[str]:
    try:
        Path(output_dir).mkdir(parents=True, exist_ok=True, mode=0o750)
    except OSError as exc:
        raise StartupError(f"failed to create output directory: {exc}") from exc
    try:
        return open(Path(output_dir) / INDEX_FILENAME, "a", encoding="utf-8")
    except OSError as exc:
        raise StartupError(f"failed to open index file for writing: {exc}") from exc


class Runner:
    """Wires the generator, worker pool and collector together for one run."""

    def __init__(
        self,
        fetch_config: FetchConfig,
        output_config: OutputConfig,
        dedup_config: DedupConfig,
        *,
        requester: Requester | None = None,
        limiter: HostLimiter | None = None,
        echo: Optional[IO[str]] = None,
    ) -> None:
        self.fetch_config = fetch_config
        self.output_config = output_config
        self.dedup_config = dedup_config
        self._fetcher: Fetcher | None = None
        if requester is None:
            self._fetcher = Fetcher(fetch_config)
            requester = self._fetcher
        self._requester: Requester = requester
        if limiter is None and fetch_config.delay_seconds > 0:
            limiter = HostRateLimiter(fetch_config.delay_seconds)
        self._limiter = limiter
        self._echo = echo if echo is not None else sys.stdout

    def run(self, paths: list[str], hosts: list[str]) -> RunResult:
        start = perf_counter()
        pool = WorkerPool(self._requester, self.fetch_config.concurrency, limiter=self._limiter)
        store = DedupStore(Comparer(self.dedup_config))
        logger.info(
            "Starting run: %d paths x %d hosts with %d workers",
            len(paths),
            len(hosts),
            pool.concurrency,
        )

        with open_index(self.output_config.output_dir) as index:
            collector = ResultCollector(self.output_config, store, index, echo=self._echo)
            with ThreadPoolExecutor(
                max_workers=pool.concurrency, thread_name_prefix="fetch"
            ) as workers, ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="collect"
            ) as collecting:
                worker_futures = [workers.submit(pool.work) for _ in range(pool.concurrency)]
                collector_future = collecting.submit(collector.run, pool.results)

                try:
                    requested = feed(
                        pool.requests,
                        generate_requests(paths, hosts, self.fetch_config),
                        pool.concurrency,
                    )
                    handled = sum(future.result() for future in worker_futures)
                finally:
                    # no worker puts results past this point; release the collector
                    pool.results.put(END_OF_QUEUE)
                    if self._fetcher is not None:
                        self._fetcher.close()
                stats = collector_future.result()

        elapsed = perf_counter() - start
        logger.info(
            "Run finished in %.2fs: requested=%d saved=%d duplicates=%d failed=%d filtered=%d",
            elapsed,
            requested,
            stats.saved,
            stats.duplicates,
            stats.failed,
            stats.filtered,
        )
        return RunResult(requested=requested, handled=handled, stats=stats, elapsed=elapsed)


__all__ = ["Runner", "RunResult", "StartupError", "load_inputs", "open_index"]
