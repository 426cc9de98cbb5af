"""Markup profiling: start-tag sequences and class attribute tokens."""
from __future__ import annotations

import logging
from html.parser import HTMLParser

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from .models import MarkupProfile

logger = logging.getLogger(__name__)


class _StartTagCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tags: list[str] = []

    def handle_starttag(self, tag, attrs) -> None:
        if tag:
            self.tags.append(tag.lower())


def decode_body(body: bytes) -> str:
    return body.decode("utf-8", errors="replace")


def extract_tags(body: bytes) -> tuple[str, ...]:
    """Return start-tag names in document order.

    The tokenizer never raises on malformed markup; if it gives up part way
    through, the tags collected up to that point are returned.
    """
    collector = _StartTagCollector()
    try:
        collector.feed(decode_body(body))
        collector.close()
    except (AssertionError, ValueError) as exc:
        logger.debug("Tokenizer stopped early after %d tags: %s", len(collector.tags), exc)
    return tuple(collector.tags)


def extract_classes(body: bytes) -> str:
    """Return every raw ``class`` attribute value joined by a single space.

    Raises ``ParserRejectedMarkup`` when the tree builder refuses the input.
    """
    soup = BeautifulSoup(decode_body(body), "html.parser", multi_valued_attributes=None)
    return " ".join(tag["class"] for tag in soup.find_all(class_=True))


def profile(body: bytes) -> MarkupProfile:
    tags = extract_tags(body)
    if not tags:
        return MarkupProfile(tags=tuple(), classes="")
    try:
        classes = extract_classes(body)
    except ParserRejectedMarkup as exc:
        logger.warning("Markup rejected by tree parser, treating as text: %s", exc)
        return MarkupProfile(tags=tuple(), classes="")
    return MarkupProfile(tags=tags, classes=classes)


__all__ = ["decode_body", "extract_classes", "extract_tags", "profile"]
