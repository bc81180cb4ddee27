"""Weighted drill selection."""

from defense_drill.selection.random_source import RandomSource, SeededRandom
from defense_drill.selection.selector import (
    ONE_WEEK_MILLIS,
    DrillSelector,
    drill_weight,
    recency_factor,
)

__all__ = [
    "ONE_WEEK_MILLIS",
    "DrillSelector",
    "RandomSource",
    "SeededRandom",
    "drill_weight",
    "recency_factor",
]
