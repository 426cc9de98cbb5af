"""Scoring helpers for similarity aggregation."""
from __future__ import annotations

from ..config import DedupConfig


class ScoreAggregator:
    def __init__(self, config: DedupConfig) -> None:
        self.config = config

    def overall(self, structure_score: float, style_score: float) -> float:
        weight_structure, weight_style = self.config.normalised_weights()
        return (structure_score * weight_structure) + (style_score * weight_style)

    def is_duplicate(self, score: float) -> bool:
        return score >= self.config.threshold


__all__ = ["ScoreAggregator"]
