"""Assistant handlers."""

from apps.assistant.handlers.generate_content import generate_content

__all__ = ["generate_content"]
