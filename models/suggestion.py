"""Suggestion models and confidence helpers."""

import math
from dataclasses import dataclass
from typing import Optional

HIGH_CONFIDENCE = 0.80
MEDIUM_CONFIDENCE = 0.50


@dataclass(frozen=True)
class CategorySuggestion:
    """A candidate category proposed by a model backend.

    Attributes:
        name: Suggested category name, as returned by the model.
        justification: Optional one-sentence reason.
        confidence: Raw confidence; either in [0, 1] or a percentage.
    """

    name: str
    justification: Optional[str] = None
    confidence: Optional[float] = None


@dataclass(frozen=True)
class AnnotatedSuggestion:
    """A validated suggestion ready for display in the approval gate."""

    suggestion: CategorySuggestion
    category_id: Optional[int]
    confidence: Optional[float]  # normalized to [0, 1]
    bucket: Optional[str]  # "high", "medium" or "low"

    @property
    def name(self) -> str:
        return self.suggestion.name

    @property
    def justification(self) -> str:
        return self.suggestion.justification or ""

    @property
    def percent(self) -> Optional[int]:
        if self.confidence is None:
            return None
        return round(self.confidence * 100)


def normalize_confidence(raw: Optional[float]) -> Optional[float]:
    """Normalize a raw confidence to [0, 1].

    Values above 1 are read as percentages and the result is clamped to 1.
    Negative and non-finite values are treated as absent.
    """
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    if value > 1:
        value = value / 100
    if value < 0:
        return None
    return min(value, 1.0)


def confidence_bucket(confidence: Optional[float]) -> Optional[str]:
    """Bucket a normalized confidence as high/medium/low (None if absent)."""
    if confidence is None:
        return None
    if confidence >= HIGH_CONFIDENCE:
        return "high"
    if confidence >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"
