"""Shared FastAPI dependencies."""

from fastapi import Request

from .suggestions.service import SuggestionResolver


def get_resolver(request: Request) -> SuggestionResolver:
    """Get the suggestion resolver from app state."""
    return request.app.state.resolver
