"""Anthropic Claude LLM implementation."""

import logging
from typing import Any

import httpx
from anthropic import (
    APIConnectionError,
    APIError,
    APIResponseValidationError,
    APIStatusError,
    APITimeoutError,
    AsyncAnthropic,
)

from config import get_settings

from .base import BaseLLMService, LLMError, LLMErrorKind

logger = logging.getLogger(__name__)


def classify_error(error: APIError) -> LLMErrorKind:
    """Map an Anthropic SDK error onto a retryable or terminal kind."""
    if isinstance(error, APITimeoutError):
        return LLMErrorKind.TIMEOUT
    if isinstance(error, APIConnectionError):
        return LLMErrorKind.UPSTREAM
    if isinstance(error, APIResponseValidationError):
        return LLMErrorKind.MALFORMED_RESPONSE
    if isinstance(error, APIStatusError):
        status = error.status_code
        if status in (401, 403):
            return LLMErrorKind.AUTHENTICATION
        if status == 429:
            return LLMErrorKind.RATE_LIMIT
        if status == 408 or status >= 500:
            return LLMErrorKind.UPSTREAM
        return LLMErrorKind.INVALID_REQUEST
    return LLMErrorKind.UPSTREAM


class AnthropicService(BaseLLMService):
    """Claude LLM service via Anthropic API."""

    def __init__(
        self,
        model: str | None = None,
        client: AsyncAnthropic | None = None,
    ) -> None:
        settings = get_settings()
        super().__init__(
            max_retries=settings.llm_max_retries,
            backoff_seconds=settings.llm_retry_backoff_seconds,
        )
        self.model = model or settings.llm_model
        self.settings = settings

        # SDK retries off: BaseLLMService.generate is the only retry layer
        self._client = client or AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=httpx.Timeout(timeout=settings.llm_timeout_seconds, connect=10.0),
            max_retries=0,
        )

    async def _complete(
        self,
        prompt: str,
        system: str | None,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a response using Claude."""
        request: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens or self.settings.llm_max_tokens,
            "temperature": temperature
            if temperature is not None
            else self.settings.llm_temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        try:
            response = await self._client.messages.create(**request)
        except APIError as e:
            kind = classify_error(e)
            if kind == LLMErrorKind.RATE_LIMIT:
                logger.warning("Claude rate limit hit: %s", e)
            else:
                logger.error("Claude API error (%s): %s", kind.value, e)
            raise LLMError(f"LLM service error: {e}", kind) from e

        text = "".join(
            block.text
            for block in getattr(response, "content", None) or []
            if getattr(block, "type", None) == "text"
        )
        if not text:
            logger.error("Claude response had no text content: %r", response)
            raise LLMError(
                "Model returned no text content", LLMErrorKind.MALFORMED_RESPONSE
            )
        return text
