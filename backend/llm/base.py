"""Base LLM service interface.

Every model call in the application goes through `BaseLLMService.generate`.
Providers implement `_complete` for a single attempt; the base class owns the
retry policy so it applies the same way to every caller.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum

logger = logging.getLogger(__name__)


class LLMErrorKind(str, Enum):
    """Why a generation call failed."""

    AUTHENTICATION = "authentication"
    INVALID_REQUEST = "invalid_request"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    UPSTREAM = "upstream"
    MALFORMED_RESPONSE = "malformed_response"


RETRYABLE_KINDS = frozenset(
    {LLMErrorKind.RATE_LIMIT, LLMErrorKind.TIMEOUT, LLMErrorKind.UPSTREAM}
)


class LLMError(Exception):
    """Raised when LLM generation fails."""

    def __init__(self, message: str, kind: LLMErrorKind = LLMErrorKind.UPSTREAM):
        super().__init__(message)
        self.kind = kind

    @property
    def retryable(self) -> bool:
        """Whether another attempt could succeed."""
        return self.kind in RETRYABLE_KINDS


class BaseLLMService(ABC):
    """Abstract base class for LLM services.

    Args:
        max_retries: Extra attempts for retryable failures. 0 means one attempt.
        backoff_seconds: Delay before the first retry, doubled on each retry.
    """

    def __init__(self, max_retries: int = 0, backoff_seconds: float = 1.0) -> None:
        self.max_retries = max(0, max_retries)
        self.backoff_seconds = backoff_seconds

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a single response.

        Args:
            prompt: User message.
            system: Optional system instructions.
            temperature: Sampling temperature (0-1).
            max_tokens: Maximum tokens to generate.

        Returns:
            Generated text.

        Raises:
            LLMError: If every allowed attempt fails, or on a terminal failure.
        """
        attempts = self.max_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                return await self._complete(
                    prompt,
                    system,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            except LLMError as e:
                if not e.retryable or attempt >= attempts:
                    raise

                wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                logger.warning(
                    "LLM %s error: %s. Retrying in %.1fs (%d/%d)",
                    e.kind.value,
                    e,
                    wait_time,
                    attempt,
                    self.max_retries,
                )
                await asyncio.sleep(wait_time)

        # Unreachable: attempts >= 1
        raise LLMError("No generation attempt was made")

    @abstractmethod
    async def _complete(
        self,
        prompt: str,
        system: str | None,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Make one generation attempt.

        Raises:
            LLMError: Classified failure of this attempt.
        """
