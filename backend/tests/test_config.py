"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from config import Settings


class TestSettings:
    """Tests for Settings."""

    def test_missing_api_key_fails(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_blank_api_key_fails(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "   ")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", " sk-test ")
        monkeypatch.delenv("LLM_MAX_RETRIES", raising=False)

        settings = Settings(_env_file=None)

        assert settings.anthropic_api_key == "sk-test"
        assert settings.llm_max_tokens == 1024
        assert settings.context_char_budget == 7000
        assert settings.llm_max_retries == 0
        assert settings.max_file_size_bytes == 20 * 1024 * 1024

    def test_negative_retries_rejected(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-test")
        monkeypatch.setenv("LLM_MAX_RETRIES", "-1")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
