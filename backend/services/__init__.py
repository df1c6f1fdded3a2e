"""Services module for the document chat pipeline.

Contains:
- Text extraction from uploaded PDFs
- The in-memory document context store
- Grounding prompt assembly

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.context_store import DocumentContextStore
from services.document import (
    ExtractionError,
    FileTooLargeError,
    StorageError,
    TextExtractor,
    UnsupportedFileTypeError,
)
from services.errors import PreconditionError, ValidationError
from services.prompt_builder import ContextPromptBuilder
from services.types import DocumentContext, DocumentMetadata, ExtractedDocument

__all__ = [
    # Core services
    "ContextPromptBuilder",
    "DocumentContextStore",
    "TextExtractor",
    # Errors
    "ExtractionError",
    "FileTooLargeError",
    "PreconditionError",
    "StorageError",
    "UnsupportedFileTypeError",
    "ValidationError",
    # Types
    "DocumentContext",
    "DocumentMetadata",
    "ExtractedDocument",
]
