"""Pytest configuration and fixtures for EaseAI tests."""

import os
import sys

# Set required env vars BEFORE any imports that might trigger Settings
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LLM_MAX_RETRIES", "0")

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from collections.abc import Callable

import fitz  # PyMuPDF
import pytest
from fastapi.testclient import TestClient

from llm import BaseLLMService, LLMError
from services import DocumentContextStore


class FakeLLMService(BaseLLMService):
    """Records every prompt and answers from a scripted responder."""

    def __init__(
        self,
        responder: Callable[[str, str | None], str] | None = None,
        failures: list[LLMError] | None = None,
        max_retries: int = 0,
    ) -> None:
        super().__init__(max_retries=max_retries, backoff_seconds=0)
        self.responder = responder or (lambda prompt, system: "ok")
        self.failures = list(failures or [])
        self.calls: list[dict] = []

    async def _complete(self, prompt, system, *, temperature=None, max_tokens=None):
        self.calls.append(
            {
                "prompt": prompt,
                "system": system,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
        )
        if self.failures:
            raise self.failures.pop(0)
        return self.responder(prompt, system)


def build_pdf(*pages: str, metadata: dict[str, str] | None = None) -> bytes:
    """Build an in-memory PDF with one line of text per page."""
    doc = fitz.open()
    try:
        for text in pages:
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text)
        if metadata:
            doc.set_metadata(metadata)
        return doc.tobytes()
    finally:
        doc.close()


@pytest.fixture
def make_pdf():
    """Factory for PDF payloads."""
    return build_pdf


@pytest.fixture
def fake_llm():
    """Fake gateway answering "ok" to everything."""
    return FakeLLMService()


@pytest.fixture
def document_store():
    """Fresh, empty document store."""
    return DocumentContextStore()


@pytest.fixture
def client(fake_llm, document_store):
    """TestClient wired to the fake gateway and a fresh store."""
    from dependencies import get_document_store, get_llm_service
    from main import app

    app.dependency_overrides[get_llm_service] = lambda: fake_llm
    app.dependency_overrides[get_document_store] = lambda: document_store
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()
