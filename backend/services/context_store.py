"""In-memory holder for the most recently uploaded document.

One document at a time, process wide. A successful upload replaces the whole
context; nothing is ever merged or appended. Reads return an immutable
snapshot, so a question always sees either the old or the new document in
full, never a mix.
"""

import logging
import threading
from datetime import UTC, datetime

from services.types import DocumentContext

logger = logging.getLogger(__name__)


class DocumentContextStore:
    """Single-slot store for the current document context.

    Safe to share between the event loop and worker threads. The last
    `replace` to complete wins.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._context = DocumentContext()

    def replace(
        self,
        text: str,
        *,
        filename: str | None = None,
        page_count: int | None = None,
        title: str | None = None,
        author: str | None = None,
    ) -> DocumentContext:
        """Swap in a new document and return the snapshot that was stored."""
        context = DocumentContext(
            text=text,
            filename=filename,
            page_count=page_count,
            title=title or None,
            author=author or None,
            uploaded_at=datetime.now(UTC),
        )
        with self._lock:
            previous = self._context
            self._context = context

        if previous.loaded:
            logger.info(
                "Replaced document %s with %s", previous.filename, context.filename
            )
        return context

    def current(self) -> str:
        """Return the current document text (empty if none loaded)."""
        return self.snapshot().text

    def snapshot(self) -> DocumentContext:
        """Return the current document context."""
        with self._lock:
            return self._context
