"""OpenAI chat-completions client with typed results.

The client never raises for provider errors: every call returns either a
``CompletionOk`` with the raw response text or a ``CompletionFailure``
tagged with a ``FailureKind``. Callers branch on the variant instead of
inspecting exception messages.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Protocol

import openai

from ..prompts import SUGGESTIONS_SYSTEM_PROMPT, SUGGESTIONS_USER_PROMPT

logger = logging.getLogger(__name__)

MAX_PROMPT_CHARS = 400


class FailureKind(str, enum.Enum):
    NOT_CONFIGURED = "not_configured"
    AUTHENTICATION = "authentication"
    RATE_LIMITED = "rate_limited"
    TRANSPORT = "transport"
    EMPTY_RESPONSE = "empty_response"


@dataclass(frozen=True)
class CompletionOk:
    text: str


@dataclass(frozen=True)
class CompletionFailure:
    kind: FailureKind
    detail: str = ""


CompletionResult = CompletionOk | CompletionFailure


class CompletionClient(Protocol):
    """Suggestion completion interface."""

    @property
    def configured(self) -> bool: ...
    def complete(self, content: str) -> CompletionResult: ...


def build_messages(content: str) -> list[dict]:
    """Build the chat messages for a piece of content, truncated to MAX_PROMPT_CHARS."""
    return [
        {"role": "system", "content": SUGGESTIONS_SYSTEM_PROMPT},
        {"role": "user", "content": SUGGESTIONS_USER_PROMPT.format(content=content[:MAX_PROMPT_CHARS])},
    ]


class OpenAICompletionClient:
    """OpenAI-backed completion client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        max_tokens: int = 300,
        temperature: float = 0.3,
        timeout: float | None = None,
        client: openai.OpenAI | None = None,
    ) -> None:
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        if client is None:
            kwargs = {"api_key": api_key}
            if timeout is not None:
                kwargs["timeout"] = timeout
            client = openai.OpenAI(**kwargs)
        self._client = client

    @property
    def configured(self) -> bool:
        return True

    def complete(self, content: str) -> CompletionResult:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=build_messages(content),
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except openai.AuthenticationError as exc:
            return CompletionFailure(FailureKind.AUTHENTICATION, str(exc))
        except openai.RateLimitError as exc:
            return CompletionFailure(FailureKind.RATE_LIMITED, str(exc))
        except openai.OpenAIError as exc:
            return CompletionFailure(FailureKind.TRANSPORT, str(exc))

        if not response.choices:
            return CompletionFailure(FailureKind.EMPTY_RESPONSE, "no choices returned")
        text = response.choices[0].message.content
        if not text or not text.strip():
            return CompletionFailure(FailureKind.EMPTY_RESPONSE, "empty message content")

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.debug(
                "OpenAI completion: model=%s, prompt_tokens=%s, completion_tokens=%s",
                self.model,
                usage.prompt_tokens,
                usage.completion_tokens,
            )
        return CompletionOk(text.strip())


class NullCompletionClient:
    """No-op client for when no API key is configured. Never touches the network."""

    @property
    def configured(self) -> bool:
        return False

    def complete(self, content: str) -> CompletionResult:
        return CompletionFailure(FailureKind.NOT_CONFIGURED, "OpenAI API key not configured")


def create_completion_client(
    api_key: str,
    model: str = "gpt-4o-mini",
    max_tokens: int = 300,
    temperature: float = 0.3,
    timeout: float | None = None,
) -> CompletionClient:
    """Factory: create the appropriate completion client based on the credential."""
    if not api_key:
        return NullCompletionClient()
    return OpenAICompletionClient(
        api_key,
        model=model,
        max_tokens=max_tokens,
        temperature=temperature,
        timeout=timeout,
    )
