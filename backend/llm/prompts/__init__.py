"""LLM prompts for various use cases."""

from llm.prompts.document_qa import (
    DOCUMENT_QA_PROMPT,
    DOCUMENT_QA_SYSTEM_PROMPT,
    REFUSAL_PHRASE,
)

__all__ = [
    "DOCUMENT_QA_PROMPT",
    "DOCUMENT_QA_SYSTEM_PROMPT",
    "REFUSAL_PHRASE",
]
