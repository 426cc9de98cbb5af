"""Separating captured transcripts from the response body they carry."""
from __future__ import annotations

import re

# status line, one or more header lines, blank line
_HEADER_BLOCK_RE = re.compile(rb"^< HTTP/[0-9.]+[^\n]*\n(?:< [^\n]*\n)+\n", re.MULTILINE)


def strip_transport_headers(raw: bytes) -> bytes:
    """Return the bytes following the response header block of ``raw``.

    When no header block, or more than one, is found the input is returned
    unchanged.
    """
    matches = list(_HEADER_BLOCK_RE.finditer(raw))
    if len(matches) != 1:
        return raw
    return raw[matches[0].end():]


__all__ = ["strip_transport_headers"]
