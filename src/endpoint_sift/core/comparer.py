"""Similarity scoring between two captured response bodies."""
from __future__ import annotations

import difflib
import logging
from typing import Sequence

import jellyfish

from ..config import DedupConfig
from .extractor import decode_body, profile
from .models import MarkupProfile
from .scoring import ScoreAggregator

logger = logging.getLogger(__name__)


def structural_similarity(tags_a: Sequence[str], tags_b: Sequence[str]) -> float:
    """Ratcliff/Obershelp ratio of two tag sequences."""
    seq_a, seq_b = tuple(tags_a), tuple(tags_b)
    # SequenceMatcher can break ties differently depending on argument order
    if seq_a > seq_b:
        seq_a, seq_b = seq_b, seq_a
    return difflib.SequenceMatcher(None, seq_a, seq_b, autojunk=False).ratio()


def style_similarity(classes_a: str, classes_b: str) -> float:
    return jaccard_similarity(classes_a, classes_b)


def jaccard_similarity(text_a: str, text_b: str) -> float:
    """Jaccard index of the whitespace-separated tokens of two strings."""
    if text_a == text_b:
        return 1.0
    set_a = set(text_a.split())
    set_b = set(text_b.split())
    union = len(set_a | set_b)
    if not union:
        return 0.0
    return len(set_a & set_b) / union


def text_similarity(body_a: bytes, body_b: bytes) -> float:
    return jellyfish.jaro_similarity(decode_body(body_a), decode_body(body_b))


class Comparer:
    """Scores how alike two response bodies are."""

    def __init__(self, config: DedupConfig) -> None:
        self.config = config
        self._scorer = ScoreAggregator(config)

    def similarity(self, body_a: bytes, body_b: bytes) -> float:
        profile_a = profile(body_a)
        profile_b = profile(body_b)
        if not profile_a.is_markup or not profile_b.is_markup:
            return text_similarity(body_a, body_b)
        return self.markup_similarity(profile_a, profile_b)

    def markup_similarity(self, profile_a: MarkupProfile, profile_b: MarkupProfile) -> float:
        # tags as written; elements a tree parser would imply (html, head, body) are not added
        structure_score = structural_similarity(profile_a.tags, profile_b.tags)
        style_score = style_similarity(profile_a.classes, profile_b.classes)
        return self._scorer.overall(structure_score, style_score)

    def is_duplicate(self, body_a: bytes, body_b: bytes) -> tuple[bool, float]:
        """Return whether two header-stripped bodies count as duplicates, and the score."""
        if not body_a and not body_b:
            return True, 1.0
        score = self.similarity(body_a, body_b)
        return self._scorer.is_duplicate(score), score


__all__ = [
    "Comparer",
    "jaccard_similarity",
    "structural_similarity",
    "style_similarity",
    "text_similarity",
]
