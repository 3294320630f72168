"""Shared test fixtures."""

from contextlib import ExitStack, asynccontextmanager
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from discovery_api.config import Settings
from discovery_api.integrations.openai_client import (
    CompletionFailure,
    CompletionOk,
    FailureKind,
    NullCompletionClient,
)
from discovery_api.suggestions.service import SuggestionResolver, create_resolver


class StubCompletionClient:
    """Completion client returning a canned result and recording calls."""

    def __init__(self, result) -> None:
        self.result = result
        self.calls: list[str] = []

    @property
    def configured(self) -> bool:
        return True

    def complete(self, content: str):
        self.calls.append(content)
        return self.result


@pytest.fixture
def mock_openai():
    """MagicMock standing in for openai.OpenAI."""
    return MagicMock()


@pytest.fixture
def stub_client():
    """Factory fixture: StubCompletionClient for a given result."""
    return StubCompletionClient


@pytest.fixture
def ok_client():
    return StubCompletionClient(
        CompletionOk('[{"title":"Advanced SQL","description":"Hands-on course"}]')
    )


@pytest.fixture
def rate_limited_client():
    return StubCompletionClient(CompletionFailure(FailureKind.RATE_LIMITED, "rate limit reached"))


@pytest.fixture
def null_resolver():
    return SuggestionResolver(NullCompletionClient())


@pytest.fixture
def make_client():
    """Factory fixture: build a TestClient for given settings and resolver.

    Settings are patched for the lifetime of the client, the lifespan is
    replaced so the resolver is built from those settings, and rate limit counters
    start from zero.
    """
    from discovery_api.dependencies import get_resolver
    from discovery_api.main import create_app
    from discovery_api.rate_limit import limiter

    stack = ExitStack()

    def _make(resolver: SuggestionResolver | None = None, **settings_overrides):
        settings_overrides.setdefault("openai_api_key", "")
        settings = Settings(_env_file=None, **settings_overrides)

        @asynccontextmanager
        async def _test_lifespan(app):
            app.state.resolver = resolver or create_resolver(settings)
            yield

        stack.enter_context(patch("discovery_api.main.lifespan", _test_lifespan))
        stack.enter_context(patch("discovery_api.main.settings", settings))
        app = create_app()
        if resolver is not None:
            app.dependency_overrides[get_resolver] = lambda: resolver
        return stack.enter_context(TestClient(app, raise_server_exceptions=False))

    limiter.reset()
    with stack:
        yield _make
    limiter.reset()


@pytest.fixture
def app_client(make_client):
    """TestClient with no OpenAI credential configured."""
    return make_client()
