"""Command-line interface for the endpoint sifter."""
from __future__ import annotations

import argparse
import logging

import urllib3

from .config import (
    DEFAULT_HOSTS_FILE,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PATHS_FILE,
    DEFAULT_USER_AGENT,
    DedupConfig,
    FetchConfig,
    OutputConfig,
)
from .runner import Runner, StartupError, load_inputs

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Request many paths on many hosts and keep only novel responses"
    )
    parser.add_argument("paths", nargs="?", default=DEFAULT_PATHS_FILE, help="File of paths, or a single literal path")
    parser.add_argument("hosts", nargs="?", default=DEFAULT_HOSTS_FILE, help="File of hosts, or a single literal host")
    parser.add_argument("output", nargs="?", default=DEFAULT_OUTPUT_DIR, help="Directory to write responses and the index to")
    parser.add_argument("-c", "--concurrency", type=int, default=20, help="Number of concurrent fetch workers")
    parser.add_argument("-d", "--delay", type=int, default=0, help="Milliseconds between requests to the same host (0 disables)")
    parser.add_argument("-H", "--header", action="append", default=[], help="Send a custom header, e.g. 'Name: value'")
    parser.add_argument("-L", "--location", action="store_true", help="Follow redirects")
    parser.add_argument("-X", "--method", default="GET", help="HTTP method to use")
    parser.add_argument("-s", "--savestatus", type=int, action="append", default=[], help="Only save responses with this status code (repeatable)")
    parser.add_argument("-t", "--timeout", type=int, default=10000, help="Per-request timeout in milliseconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print each index line as it is written")
    parser.add_argument("--no-headers", action="store_true", help="Save response bodies without the request/response headers")
    parser.add_argument("--verify-tls", action="store_true", help="Verify TLS certificates")
    parser.add_argument("--threshold", type=float, default=0.80, help="Similarity at or above which a response counts as a duplicate")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent sent when no -H overrides it")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    fetch_config = FetchConfig(
        method=args.method,
        headers=tuple(args.header),
        concurrency=max(1, args.concurrency),
        timeout=args.timeout / 1000.0,
        follow_redirects=args.location,
        delay_seconds=max(0, args.delay) / 1000.0,
        verify_tls=args.verify_tls,
        user_agent=args.user_agent,
    )
    output_config = OutputConfig(
        output_dir=args.output,
        save_status=frozenset(args.savestatus),
        no_headers=args.no_headers,
        verbose=args.verbose,
    )
    dedup_config = DedupConfig(threshold=args.threshold)

    if not fetch_config.verify_tls:
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    try:
        paths, hosts = load_inputs(args.paths, args.hosts)
        runner = Runner(fetch_config, output_config, dedup_config)
        runner.run(paths, hosts)
    except StartupError as exc:
        logger.error("%s", exc)
        return 1
    return 0


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
