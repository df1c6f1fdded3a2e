"""Documents module - upload and status of the current document."""

from apps.documents.routes import router

__all__ = ["router"]
