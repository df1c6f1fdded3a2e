"""FastAPI dependency injection for services.

Services are cached with @lru_cache() to avoid recreation per request.
Tests swap any of them through `app.dependency_overrides`.
"""

from functools import lru_cache

from llm import BaseLLMService, LLMService
from services import ContextPromptBuilder, DocumentContextStore, TextExtractor

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_document_store() -> DocumentContextStore:
    """Get the process-wide document context store."""
    return DocumentContextStore()


@lru_cache
def get_llm_service() -> BaseLLMService:
    """Get cached LLM service (expensive - has API client)."""
    return LLMService()


# --- Lightweight Services (per-request is fine) ---


def get_text_extractor() -> TextExtractor:
    """Get text extractor (stateless, cheap to create)."""
    return TextExtractor()


def get_prompt_builder() -> ContextPromptBuilder:
    """Get prompt builder (stateless, cheap to create)."""
    return ContextPromptBuilder()
