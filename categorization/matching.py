"""Resolve suggested category names to canonical category ids."""

from dataclasses import dataclass
from typing import Optional, Sequence

from logger import get_logger
from models.category import Category

logger = get_logger()

EXACT = 1
CASE_INSENSITIVE = 2
SUBSTRING = 3


@dataclass(frozen=True)
class CategoryMatch:
    category_id: int
    category_name: str
    tier: int

    @property
    def fuzzy(self) -> bool:
        """Substring matches are low-confidence and may pick an unrelated category."""
        return self.tier == SUBSTRING


def match_category(
    name: str, categories: Sequence[Category], max_tier: int = SUBSTRING
) -> Optional[CategoryMatch]:
    """Resolve ``name`` against the canonical categories.

    Tiers are tried in order and the first hit wins:
    exact match, case-insensitive match, then a substring check in either
    direction (first category in iteration order). The substring tier has no
    similarity threshold, so short names can land on an unintended category;
    those matches are logged as warnings.

    Args:
        name: Suggested category name.
        categories: Canonical (active) categories.
        max_tier: Highest tier to try; 2 disables the substring fallback.

    Returns:
        CategoryMatch or None when nothing matches.
    """
    for category in categories:
        if category.name == name:
            return CategoryMatch(category.id, category.name, EXACT)

    if max_tier < CASE_INSENSITIVE:
        return None

    lowered = name.lower()
    for category in categories:
        if category.name.lower() == lowered:
            return CategoryMatch(category.id, category.name, CASE_INSENSITIVE)

    if max_tier < SUBSTRING:
        return None

    for category in categories:
        candidate = category.name.lower()
        if candidate in lowered or lowered in candidate:
            logger.warning(
                f'Category suggestion "{name}" did not match exactly. '
                f'Using "{category.name}" instead.'
            )
            return CategoryMatch(category.id, category.name, SUBSTRING)

    return None


def match_category_id(
    name: str, categories: Sequence[Category], max_tier: int = SUBSTRING
) -> Optional[int]:
    """Like match_category, returning only the category id."""
    match = match_category(name, categories, max_tier=max_tier)
    return match.category_id if match else None
