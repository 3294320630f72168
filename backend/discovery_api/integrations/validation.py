"""Unwrapping, parsing and normalization of AI suggestion responses.

Missing fields get the fixed defaults; wrong types get coerced.
Anything that is not a non-empty JSON array is rejected so the caller
can switch to the keyword fallback.
"""

import json
import logging
import re

from pydantic import BaseModel, field_validator

from ..suggestions.schemas import Suggestion

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Professional Development"
DEFAULT_DESCRIPTION = "Explore related opportunities on LinkedIn"
MAX_SUGGESTIONS = 2

_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE_ANY = re.compile(r"```\n?")


class SuggestionAIResponse(BaseModel):
    """A single suggestion as returned by the model, with defaults."""

    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, v: object) -> str:
        return str(v) if v else DEFAULT_TITLE

    @field_validator("description", mode="before")
    @classmethod
    def coerce_description(cls, v: object) -> str:
        return str(v) if v else DEFAULT_DESCRIPTION


def unwrap_response(text: str) -> str:
    """Remove markdown code fences (```json ... ``` or ``` ... ```) anywhere in the text."""
    text = _FENCE_OPEN.sub("", text)
    text = _FENCE_ANY.sub("", text)
    return text.strip()


def normalize_suggestions(items: list) -> list[Suggestion]:
    """Keep the first MAX_SUGGESTIONS items, filling missing fields with defaults."""
    result = []
    for item in items[:MAX_SUGGESTIONS]:
        raw = item if isinstance(item, dict) else {}
        validated = SuggestionAIResponse.model_validate(raw)
        result.append(Suggestion(title=validated.title, description=validated.description))
    return result


def parse_suggestions(raw_text: str) -> list[Suggestion] | None:
    """Parse an AI response into suggestions.

    Returns None when the text is not valid JSON, is not a non-empty array,
    or holds null entries among the items kept.
    Never raises.
    """
    text = unwrap_response(raw_text)
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        logger.warning("JSON parse failed (response_len=%d, first_100=%r)", len(raw_text), raw_text[:100])
        return None

    if not isinstance(parsed, list) or not parsed:
        logger.warning("AI response is not a non-empty JSON array (type=%s)", type(parsed).__name__)
        return None

    if any(item is None for item in parsed[:MAX_SUGGESTIONS]):
        logger.warning("AI response contains null suggestions")
        return None

    return normalize_suggestions(parsed)
