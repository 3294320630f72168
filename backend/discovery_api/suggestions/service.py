"""Suggestion service: AI completion with deterministic keyword fallback."""

import enum
import logging

from ..config import Settings
from ..integrations.openai_client import (
    CompletionClient,
    CompletionFailure,
    FailureKind,
    create_completion_client,
)
from ..integrations.validation import parse_suggestions
from .fallback import generate_fallback_suggestions
from .schemas import Suggestion

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    CONFIGURATION = "configuration"
    RATE_LIMITED = "rate_limited"
    UNAVAILABLE = "unavailable"


_FAILURE_TO_ERROR = {
    FailureKind.NOT_CONFIGURED: ErrorKind.CONFIGURATION,
    FailureKind.AUTHENTICATION: ErrorKind.CONFIGURATION,
    FailureKind.RATE_LIMITED: ErrorKind.RATE_LIMITED,
    FailureKind.TRANSPORT: ErrorKind.UNAVAILABLE,
    FailureKind.EMPTY_RESPONSE: ErrorKind.UNAVAILABLE,
}


class SuggestionError(Exception):
    """Raised by a resolver with fallback disabled when the AI call fails."""

    def __init__(self, kind: ErrorKind, detail: str = "") -> None:
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


class SuggestionResolver:
    """Resolve content into at most two suggestions.

    With ``fallback_on_error`` (the default) every failure degrades into
    the keyword fallback and ``resolve`` never raises. Without it, completion
    failures surface as ``SuggestionError``; malformed responses still fall back.
    """

    def __init__(self, client: CompletionClient, fallback_on_error: bool = True) -> None:
        self.client = client
        self.fallback_on_error = fallback_on_error

    @property
    def configured(self) -> bool:
        return self.client.configured

    def resolve(self, content: str) -> list[Suggestion]:
        result = self.client.complete(content)

        if isinstance(result, CompletionFailure):
            return self._handle_failure(result, content)

        suggestions = parse_suggestions(result.text)
        if suggestions is None:
            logger.warning("Unusable AI response, using fallback suggestions")
            return generate_fallback_suggestions(content)
        return suggestions

    def _handle_failure(self, failure: CompletionFailure, content: str) -> list[Suggestion]:
        if failure.kind == FailureKind.NOT_CONFIGURED:
            logger.debug("OpenAI not configured, using fallback suggestions")
        else:
            logger.error("OpenAI API error (%s): %s", failure.kind.value, failure.detail)

        if not self.fallback_on_error:
            raise SuggestionError(_FAILURE_TO_ERROR[failure.kind], failure.detail)
        return generate_fallback_suggestions(content)


def create_resolver(settings: Settings) -> SuggestionResolver:
    """Factory: build a resolver from explicit settings values."""
    client = create_completion_client(
        settings.openai_api_key,
        model=settings.openai_model,
        max_tokens=settings.openai_max_tokens,
        temperature=settings.openai_temperature,
        timeout=settings.openai_timeout_seconds,
    )
    return SuggestionResolver(client, fallback_on_error=settings.fallback_on_error)
