"""Tests for confidence normalization and bucketing."""

import math

import pytest

from models.suggestion import (
    AnnotatedSuggestion,
    CategorySuggestion,
    confidence_bucket,
    normalize_confidence,
)


class TestNormalizeConfidence:
    """Tests for normalize_confidence."""

    def test_percentage_is_scaled(self):
        assert normalize_confidence(85) == pytest.approx(0.85)
        assert confidence_bucket(normalize_confidence(85)) == "high"

    def test_fraction_is_kept(self):
        assert normalize_confidence(0.45) == 0.45
        assert confidence_bucket(normalize_confidence(0.45)) == "low"

    def test_negative_is_absent(self):
        assert normalize_confidence(-1) is None
        assert confidence_bucket(normalize_confidence(-1)) is None

    def test_above_hundred_is_clamped(self):
        assert normalize_confidence(150) == 1.0
        assert confidence_bucket(normalize_confidence(150)) == "high"

    def test_bounds(self):
        assert normalize_confidence(0) == 0
        assert normalize_confidence(1) == 1
        assert normalize_confidence(100) == 1

    def test_non_numeric_and_non_finite(self):
        assert normalize_confidence(None) is None
        assert normalize_confidence(True) is None
        assert normalize_confidence(math.nan) is None
        assert normalize_confidence(math.inf) is None


class TestConfidenceBucket:
    """Tests for confidence_bucket thresholds."""

    @pytest.mark.parametrize(
        "value,bucket",
        [(0.8, "high"), (0.95, "high"), (0.79, "medium"), (0.5, "medium"), (0.49, "low"), (0.0, "low")],
    )
    def test_thresholds(self, value, bucket):
        assert confidence_bucket(value) == bucket


class TestAnnotatedSuggestion:
    def test_percent_and_justification(self):
        annotated = AnnotatedSuggestion(
            suggestion=CategorySuggestion("Groceries"),
            category_id=1,
            confidence=0.856,
            bucket="high",
        )

        assert annotated.percent == 86
        assert annotated.justification == ""
        assert annotated.name == "Groceries"
