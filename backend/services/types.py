"""Shared types and dataclasses for services.

Provides typed alternatives to dict[str, Any] for better type safety.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class DocumentContext:
    """The single document currently held in memory.

    Empty `text` means no document is loaded. Instances are immutable and
    are swapped whole by the context store.
    """

    text: str = ""
    filename: str | None = None
    page_count: int | None = None
    title: str | None = None
    author: str | None = None
    uploaded_at: datetime | None = None

    @property
    def loaded(self) -> bool:
        return bool(self.text)


@dataclass
class DocumentMetadata:
    """Metadata extracted from a parsed document."""

    filename: str
    title: str = ""
    author: str = ""


@dataclass
class ExtractedDocument:
    """Result of extracting text from an uploaded document."""

    text: str
    page_count: int
    metadata: DocumentMetadata = field(default_factory=lambda: DocumentMetadata(""))
