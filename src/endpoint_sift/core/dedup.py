"""On-disk admission check for a single (host, status) bucket."""
from __future__ import annotations

import logging
from pathlib import Path

from .comparer import Comparer
from .headers import strip_transport_headers

logger = logging.getLogger(__name__)


class DedupStore:
    """Decides whether a response is novel compared to what a bucket holds.

    The bucket directory is listed and read again on every call; nothing is
    cached between calls and nothing is written.
    """

    def __init__(self, comparer: Comparer) -> None:
        self._comparer = comparer

    def admit(self, bucket_dir: Path, candidate: bytes, label: str = "") -> bool:
        """Return False when ``candidate`` matches a stored response.

        ``label`` names the candidate, usually its URL, in debug output.
        """
        candidate_body = strip_transport_headers(candidate)
        for stored_path in self._stored_files(bucket_dir):
            try:
                stored = stored_path.read_bytes()
            except OSError as exc:
                logger.warning("Failed to read stored response %s: %s", stored_path, exc)
                continue
            duplicate, score = self._comparer.is_duplicate(
                candidate_body, strip_transport_headers(stored)
            )
            logger.debug("%.6f - %s - %s", score, label, stored_path)
            if duplicate:
                return False
        return True

    @staticmethod
    def _stored_files(bucket_dir: Path) -> list[Path]:
        try:
            entries = sorted(bucket_dir.iterdir())
        except FileNotFoundError:
            logger.debug("Bucket %s does not exist yet", bucket_dir)
            return []
        except OSError as exc:
            logger.warning("Failed to read bucket directory %s: %s", bucket_dir, exc)
            return []
        return [entry for entry in entries if entry.is_file()]


__all__ = ["DedupStore"]
