"""Tests for the generation gateway."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    InternalServerError,
    RateLimitError,
)

from conftest import FakeLLMService
from llm import AnthropicService, LLMError, LLMErrorKind, classify_error

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def status_error(status: int, cls=APIStatusError) -> APIStatusError:
    return cls(
        f"HTTP {status}",
        response=httpx.Response(status, request=REQUEST),
        body=None,
    )


def text_response(*texts: str) -> SimpleNamespace:
    return SimpleNamespace(
        content=[SimpleNamespace(type="text", text=t) for t in texts]
    )


@pytest.fixture
def mock_client():
    client = MagicMock()
    client.messages.create = AsyncMock(return_value=text_response("Paris"))
    return client


class TestLLMError:
    """Tests for LLMError kinds."""

    @pytest.mark.parametrize(
        "kind",
        [LLMErrorKind.RATE_LIMIT, LLMErrorKind.TIMEOUT, LLMErrorKind.UPSTREAM],
    )
    def test_retryable_kinds(self, kind):
        assert LLMError("x", kind).retryable is True

    @pytest.mark.parametrize(
        "kind",
        [
            LLMErrorKind.AUTHENTICATION,
            LLMErrorKind.INVALID_REQUEST,
            LLMErrorKind.MALFORMED_RESPONSE,
        ],
    )
    def test_terminal_kinds(self, kind):
        assert LLMError("x", kind).retryable is False


class TestClassifyError:
    """Tests for mapping SDK errors to kinds."""

    def test_timeout(self):
        assert classify_error(APITimeoutError(request=REQUEST)) == LLMErrorKind.TIMEOUT

    def test_connection(self):
        error = APIConnectionError(request=REQUEST)
        assert classify_error(error) == LLMErrorKind.UPSTREAM

    def test_rate_limit(self):
        error = status_error(429, RateLimitError)
        assert classify_error(error) == LLMErrorKind.RATE_LIMIT

    def test_authentication(self):
        error = status_error(401, AuthenticationError)
        assert classify_error(error) == LLMErrorKind.AUTHENTICATION

    def test_server_error(self):
        error = status_error(500, InternalServerError)
        assert classify_error(error) == LLMErrorKind.UPSTREAM

    def test_overloaded(self):
        assert classify_error(status_error(529)) == LLMErrorKind.UPSTREAM

    def test_bad_request(self):
        error = status_error(400, BadRequestError)
        assert classify_error(error) == LLMErrorKind.INVALID_REQUEST


class TestRetryPolicy:
    """Tests for the retry loop in BaseLLMService.generate."""

    @pytest.mark.asyncio
    async def test_single_attempt_by_default(self):
        llm = FakeLLMService(failures=[LLMError("busy", LLMErrorKind.RATE_LIMIT)])

        with pytest.raises(LLMError):
            await llm.generate("prompt")

        assert len(llm.calls) == 1

    @pytest.mark.asyncio
    async def test_retries_retryable_errors(self):
        llm = FakeLLMService(
            failures=[
                LLMError("busy", LLMErrorKind.RATE_LIMIT),
                LLMError("slow", LLMErrorKind.TIMEOUT),
            ],
            max_retries=2,
        )

        result = await llm.generate("prompt")

        assert result == "ok"
        assert len(llm.calls) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        llm = FakeLLMService(
            failures=[LLMError("down", LLMErrorKind.UPSTREAM) for _ in range(5)],
            max_retries=2,
        )

        with pytest.raises(LLMError) as exc_info:
            await llm.generate("prompt")

        assert exc_info.value.kind == LLMErrorKind.UPSTREAM
        assert len(llm.calls) == 3

    @pytest.mark.asyncio
    async def test_terminal_error_not_retried(self):
        llm = FakeLLMService(
            failures=[LLMError("bad key", LLMErrorKind.AUTHENTICATION)],
            max_retries=3,
        )

        with pytest.raises(LLMError) as exc_info:
            await llm.generate("prompt")

        assert exc_info.value.retryable is False
        assert len(llm.calls) == 1

    @pytest.mark.asyncio
    async def test_exponential_backoff(self, monkeypatch):
        delays: list[float] = []

        async def fake_sleep(seconds):
            delays.append(seconds)

        monkeypatch.setattr("llm.base.asyncio.sleep", fake_sleep)
        llm = FakeLLMService(
            failures=[LLMError("busy", LLMErrorKind.RATE_LIMIT) for _ in range(3)],
            max_retries=3,
        )
        llm.backoff_seconds = 0.5

        await llm.generate("prompt")

        assert delays == [0.5, 1.0, 2.0]


class TestAnthropicService:
    """Tests for AnthropicService with a mocked SDK client."""

    @pytest.mark.asyncio
    async def test_generate_returns_text(self, mock_client):
        service = AnthropicService(client=mock_client)

        result = await service.generate("What is the capital of France?")

        assert result == "Paris"

    @pytest.mark.asyncio
    async def test_default_output_cap(self, mock_client):
        service = AnthropicService(client=mock_client)

        await service.generate("prompt")

        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 1024
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
        assert "system" not in kwargs

    @pytest.mark.asyncio
    async def test_options_forwarded(self, mock_client):
        service = AnthropicService(model="claude-test", client=mock_client)

        await service.generate("prompt", "be brief", temperature=0.0, max_tokens=64)

        kwargs = mock_client.messages.create.call_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert kwargs["system"] == "be brief"
        assert kwargs["temperature"] == 0.0
        assert kwargs["max_tokens"] == 64

    @pytest.mark.asyncio
    async def test_joins_text_blocks(self, mock_client):
        mock_client.messages.create.return_value = text_response("Par", "is")
        service = AnthropicService(client=mock_client)

        assert await service.generate("prompt") == "Paris"

    @pytest.mark.asyncio
    async def test_empty_response_is_malformed(self, mock_client):
        mock_client.messages.create.return_value = SimpleNamespace(content=[])
        service = AnthropicService(client=mock_client)

        with pytest.raises(LLMError) as exc_info:
            await service.generate("prompt")

        assert exc_info.value.kind == LLMErrorKind.MALFORMED_RESPONSE

    @pytest.mark.asyncio
    async def test_sdk_error_wrapped(self, mock_client):
        mock_client.messages.create.side_effect = status_error(429, RateLimitError)
        service = AnthropicService(client=mock_client)

        with pytest.raises(LLMError) as exc_info:
            await service.generate("prompt")

        assert exc_info.value.kind == LLMErrorKind.RATE_LIMIT
        assert exc_info.value.retryable is True
        assert mock_client.messages.create.await_count == 1

    def test_sdk_retries_disabled(self):
        service = AnthropicService()

        assert service._client.max_retries == 0
