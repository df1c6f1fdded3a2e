"""LLM module - unified interface for language model interactions.

Usage:
    from llm import LLMService, LLMError

    llm = LLMService()
    response = await llm.generate(prompt, system)

Structure:
    - base.py: Abstract interface, error kinds and retry policy (BaseLLMService)
    - anthropic.py: Claude implementation (AnthropicService)
"""

from llm.anthropic import AnthropicService, classify_error
from llm.base import BaseLLMService, LLMError, LLMErrorKind
from llm.prompts import (
    DOCUMENT_QA_PROMPT,
    DOCUMENT_QA_SYSTEM_PROMPT,
    REFUSAL_PHRASE,
)

# Default provider - can be swapped by changing this alias
LLMService = AnthropicService

__all__ = [
    "BaseLLMService",
    "LLMService",
    "LLMError",
    "LLMErrorKind",
    "AnthropicService",
    "classify_error",
    "DOCUMENT_QA_PROMPT",
    "DOCUMENT_QA_SYSTEM_PROMPT",
    "REFUSAL_PHRASE",
]
