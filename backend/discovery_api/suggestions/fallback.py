"""Deterministic keyword-based suggestions, used when the AI path is unavailable."""

from .schemas import Suggestion

MAX_FALLBACK_SUGGESTIONS = 2

# Evaluated in order; every matching family contributes its suggestion.
KEYWORD_FAMILIES: tuple[tuple[tuple[str, ...], Suggestion], ...] = (
    (
        ("data", "analytics", "analysis"),
        Suggestion(
            title="Data Analytics Courses",
            description="Explore data science and analytics courses on LinkedIn Learning",
        ),
    ),
    (
        ("marketing", "brand", "campaign"),
        Suggestion(
            title="Digital Marketing Resources",
            description="Find marketing professionals and learning resources",
        ),
    ),
    (
        ("leadership", "management", "team"),
        Suggestion(
            title="Leadership Development",
            description="Connect with leaders and explore management courses",
        ),
    ),
    (
        ("tech", "software", "developer"),
        Suggestion(
            title="Technology Skills",
            description="Discover the latest tech courses and connect with developers",
        ),
    ),
)

DEFAULT_SUGGESTIONS: tuple[Suggestion, ...] = (
    Suggestion(
        title="Professional Development",
        description="Discover learning opportunities related to this topic",
    ),
    Suggestion(
        title="Network Growth",
        description="Connect with professionals in your field",
    ),
)


def generate_fallback_suggestions(content: str) -> list[Suggestion]:
    """Return up to two suggestions for the keyword families found in content."""
    lowered = content.lower()
    matched = [
        suggestion.model_copy()
        for keywords, suggestion in KEYWORD_FAMILIES
        if any(keyword in lowered for keyword in keywords)
    ]
    if not matched:
        matched = [suggestion.model_copy() for suggestion in DEFAULT_SUGGESTIONS]
    return matched[:MAX_FALLBACK_SUGGESTIONS]
