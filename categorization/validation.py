"""Filter model suggestions down to exact canonical category names."""

from typing import Callable, List, Optional, Sequence

from logger import get_logger
from models.category import Category
from models.suggestion import CategorySuggestion

logger = get_logger()


def validate_suggestions(
    suggestions: Sequence[CategorySuggestion],
    categories: Sequence[Category],
    on_invalid: Optional[Callable[[CategorySuggestion], None]] = None,
) -> List[CategorySuggestion]:
    """Keep only suggestions whose name is a literal, case-sensitive category name.

    Stricter than the matcher: no case folding and no substring fallback.
    Order is preserved.

    Args:
        suggestions: Parsed suggestions in model order.
        categories: Canonical (active) categories.
        on_invalid: Optional hook called for each dropped suggestion. When
            omitted, drops are logged here at warning level.

    Returns:
        The valid suggestions.
    """
    valid_names = {c.name for c in categories}

    valid = []
    for suggestion in suggestions:
        if suggestion.name in valid_names:
            valid.append(suggestion)
            continue
        if on_invalid is not None:
            on_invalid(suggestion)
        else:
            logger.warning(invalid_message(suggestion))
    return valid


def invalid_message(suggestion: CategorySuggestion) -> str:
    return f'Invalid category suggestion: "{suggestion.name}" is not in the category list'
