"""Tests for the OpenAI completion client (typed results, prompt building)."""

from types import SimpleNamespace

import httpx
import openai

from discovery_api.integrations.openai_client import (
    MAX_PROMPT_CHARS,
    CompletionFailure,
    CompletionOk,
    FailureKind,
    NullCompletionClient,
    OpenAICompletionClient,
    build_messages,
    create_completion_client,
)

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def make_openai_response(text):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=text))],
        usage=SimpleNamespace(prompt_tokens=120, completion_tokens=40),
    )


def _status_error(cls, status_code, message):
    return cls(message, response=httpx.Response(status_code, request=_REQUEST), body=None)


class TestBuildMessages:
    def test_system_and_user_roles(self):
        messages = build_messages("Some post about data")
        assert [m["role"] for m in messages] == ["system", "user"]
        assert "LinkedIn discovery assistant" in messages[0]["content"]

    def test_truncates_content(self):
        messages = build_messages("x" * 1000)
        assert messages[1]["content"] == f'Analyze this LinkedIn content: "{"x" * MAX_PROMPT_CHARS}"'


class TestOpenAICompletionClient:
    def test_success_returns_text(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_openai_response("  [{\"title\":\"A\"}]  ")
        client = OpenAICompletionClient("sk-test", client=mock_openai)

        result = client.complete("Content about leadership")

        assert result == CompletionOk('[{"title":"A"}]')

    def test_sends_fixed_parameters(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_openai_response("[]")
        client = OpenAICompletionClient("sk-test", client=mock_openai)

        client.complete("Content about leadership")

        kwargs = mock_openai.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 300
        assert kwargs["temperature"] == 0.3
        assert len(kwargs["messages"]) == 2

    def test_rate_limit_error(self, mock_openai):
        mock_openai.chat.completions.create.side_effect = _status_error(openai.RateLimitError, 429, "slow down")
        result = OpenAICompletionClient("sk-test", client=mock_openai).complete("content here")
        assert isinstance(result, CompletionFailure)
        assert result.kind == FailureKind.RATE_LIMITED

    def test_authentication_error(self, mock_openai):
        mock_openai.chat.completions.create.side_effect = _status_error(openai.AuthenticationError, 401, "bad key")
        result = OpenAICompletionClient("sk-test", client=mock_openai).complete("content here")
        assert result.kind == FailureKind.AUTHENTICATION

    def test_connection_error(self, mock_openai):
        mock_openai.chat.completions.create.side_effect = openai.APIConnectionError(request=_REQUEST)
        result = OpenAICompletionClient("sk-test", client=mock_openai).complete("content here")
        assert result.kind == FailureKind.TRANSPORT

    def test_empty_content(self, mock_openai):
        mock_openai.chat.completions.create.return_value = make_openai_response(None)
        result = OpenAICompletionClient("sk-test", client=mock_openai).complete("content here")
        assert result.kind == FailureKind.EMPTY_RESPONSE


class TestNullCompletionClient:
    def test_reports_not_configured(self):
        client = NullCompletionClient()
        assert client.configured is False
        assert client.complete("anything at all").kind == FailureKind.NOT_CONFIGURED


class TestCreateCompletionClient:
    def test_no_key_gives_null_client(self):
        assert isinstance(create_completion_client(""), NullCompletionClient)

    def test_key_gives_openai_client(self):
        client = create_completion_client("sk-test", model="gpt-4o", max_tokens=100)
        assert isinstance(client, OpenAICompletionClient)
        assert client.model == "gpt-4o"
        assert client.max_tokens == 100
