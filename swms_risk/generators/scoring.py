from __future__ import annotations

import enum
from typing import Union

SCORE_MIN = 1
SCORE_MAX = 20

# (lower bound, level), checked from the top down
_THRESHOLDS = (
    (16, "Extreme"),
    (11, "High"),
    (6, "Medium"),
)


class RiskLevel(str, enum.Enum):
    """Ordinal risk level derived from a 1-20 consequence x likelihood score."""

    low = "Low"
    medium = "Medium"
    high = "High"
    extreme = "Extreme"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {
    RiskLevel.low: 1,
    RiskLevel.medium: 2,
    RiskLevel.high: 3,
    RiskLevel.extreme: 4,
}


def clamp_score(score: Union[int, float]) -> int:
    """Round a numeric score and pin it into the 1-20 matrix range."""
    if isinstance(score, int):
        # ints may be too large for float()
        return max(SCORE_MIN, min(SCORE_MAX, score))
    return max(SCORE_MIN, min(SCORE_MAX, int(round(float(score)))))


def classify(score: Union[int, float]) -> RiskLevel:
    """Map a score to its RiskLevel. Initial and residual scores share this table."""
    value = clamp_score(score)
    for lower, label in _THRESHOLDS:
        if value >= lower:
            return RiskLevel(label)
    return RiskLevel.low


__all__ = ["RiskLevel", "SCORE_MIN", "SCORE_MAX", "clamp_score", "classify"]
