"""Assistant module - generic prompt generation."""

from apps.assistant.routes import router

__all__ = ["router"]
