"""Best-effort extraction of category suggestions from free-form model output.

Model replies are not guaranteed to be bare JSON: they may be wrapped in a
fenced code block or surrounded by prose. Parsing runs in two stages (direct
decode, then a first-``{``-to-last-``}`` slice). When neither yields a JSON
object the result is an empty list; nothing is raised past this module.
"""

import json
import math
import re
from typing import Any, List, Optional

from pydantic import BaseModel, ValidationError, field_validator

from errors import ParseError
from logger import get_logger
from models.suggestion import CategorySuggestion

logger = get_logger()

MAX_SUGGESTIONS = 3

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)\s*```", re.IGNORECASE)


def parse_suggestions(text: Optional[str]) -> List[CategorySuggestion]:
    """Parse up to three suggestions from raw model text.

    Args:
        text: Raw text content returned by a model backend.

    Returns:
        List of CategorySuggestion in the order the model produced them.
        Empty when the text holds no recoverable payload.
    """
    raw = (text or "").strip()
    if not raw:
        return []

    try:
        payload = _decode(_extract_candidate(raw))
    except ParseError as e:
        logger.debug(f"Model response not parseable as JSON: {e}")
        return []

    entries = payload.get("suggestions") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        return []

    suggestions = []
    for entry in entries:
        suggestion = _coerce(entry)
        if suggestion is not None:
            suggestions.append(suggestion)
    return suggestions[:MAX_SUGGESTIONS]


def _extract_candidate(raw: str) -> str:
    match = _FENCE_RE.search(raw)
    return (match.group(1) if match else raw).strip()


def _decode(candidate: str) -> Any:
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass

    start = candidate.find("{")
    end = candidate.rfind("}")
    if start < 0 or end <= start:
        raise ParseError("no JSON object found")
    try:
        return json.loads(candidate[start : end + 1])
    except json.JSONDecodeError as e:
        raise ParseError(str(e)) from e


class SuggestionEntry(BaseModel):
    """One entry of the ``suggestions`` array in a model reply."""

    name: str
    justification: Optional[str] = None
    confidence: Optional[float] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value: Any) -> str:
        name = str(value).strip() if value is not None else ""
        if not name:
            raise ValueError("suggestion has no name")
        return name

    @field_validator("justification", mode="before")
    @classmethod
    def strip_justification(cls, value: Any) -> Optional[str]:
        return (str(value).strip() or None) if value else None

    @field_validator("confidence", mode="before")
    @classmethod
    def finite_number(cls, value: Any) -> Optional[float]:
        # bool is an int subclass; true/false are not confidences
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        value = float(value)
        return value if math.isfinite(value) else None


def _coerce(entry: Any) -> Optional[CategorySuggestion]:
    try:
        parsed = SuggestionEntry.model_validate(entry)
    except ValidationError:
        return None
    return CategorySuggestion(
        name=parsed.name,
        justification=parsed.justification,
        confidence=parsed.confidence,
    )
