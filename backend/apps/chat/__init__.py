"""Chat module - questions answered from the current document."""

from apps.chat.routes import router

__all__ = ["router"]
