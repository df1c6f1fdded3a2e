"""Text extraction service for uploaded PDF documents.

Handles:
- Upload validation (emptiness, size, file type)
- Scoped temporary storage of the uploaded bytes
- Text extraction from PDF (PyMuPDF)
- Filename sanitization for logging and status output

Blocking disk and parsing work runs in a worker thread via asyncio.to_thread.
"""

import asyncio
import logging
import os
import re
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import fitz  # PyMuPDF

from config import get_settings
from services.errors import ValidationError
from services.types import DocumentMetadata, ExtractedDocument
from utils import format_file_size

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = frozenset({".pdf"})

# PDF readers accept the header anywhere in the first 1024 bytes
PDF_MAGIC = b"%PDF-"
PDF_HEADER_WINDOW = 1024


class ExtractionError(Exception):
    """Raised when the document is malformed or cannot be parsed."""

    pass


class StorageError(Exception):
    """Raised when the temporary upload file cannot be written or read."""

    pass


class UnsupportedFileTypeError(Exception):
    """Raised when file type is not supported."""

    pass


class FileTooLargeError(Exception):
    """Raised when file exceeds size limit."""

    pass


@contextmanager
def temporary_upload(content: bytes, suffix: str = ".pdf") -> Iterator[str]:
    """Hold uploaded bytes in a uniquely named temp file for the block.

    The file is removed on exit whether the block succeeds or raises.

    Raises:
        StorageError: If the file cannot be created or written.
    """
    temp_path = None
    try:
        try:
            with tempfile.NamedTemporaryFile(
                delete=False, prefix="upload-", suffix=suffix
            ) as temp_file:
                temp_path = temp_file.name
                temp_file.write(content)
        except OSError as e:
            raise StorageError(f"Failed to store upload: {e}") from e

        yield temp_path

    finally:
        if temp_path and os.path.exists(temp_path):
            os.unlink(temp_path)


class TextExtractor:
    """Turns an uploaded PDF payload into plain text."""

    def __init__(self, max_file_size_bytes: int | None = None) -> None:
        settings = get_settings()
        self.max_file_size_bytes = max_file_size_bytes or settings.max_file_size_bytes

    def sanitize_filename(self, filename: str) -> str:
        """Sanitize filename to prevent path traversal and other issues."""
        filename = Path(filename or "").name
        filename = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "_", filename)

        max_length = 255
        if len(filename) > max_length:
            name, ext = Path(filename).stem, Path(filename).suffix
            filename = name[: max_length - len(ext)] + ext

        if not filename or filename.startswith("."):
            filename = "document" + Path("document" + filename).suffix

        return filename

    def validate_file(self, filename: str, file_size: int) -> str:
        """Validate an upload and return its extension."""
        if file_size <= 0:
            raise ValidationError("Uploaded file is empty.")

        if file_size > self.max_file_size_bytes:
            raise FileTooLargeError(
                f"File size {format_file_size(file_size)} exceeds limit of "
                f"{format_file_size(self.max_file_size_bytes)}"
            )

        ext = Path(filename or "").suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileTypeError(
                f"File type '{ext or 'unknown'}' not supported. Supported: PDF"
            )

        return ext

    async def extract(self, content: bytes, filename: str) -> ExtractedDocument:
        """Extract plain text from an uploaded PDF.

        Empty text (e.g. an image-only scan) is returned as-is, not raised.

        Raises:
            ValidationError: Payload is empty.
            FileTooLargeError: Payload exceeds the configured limit.
            UnsupportedFileTypeError: Filename is not a PDF.
            ExtractionError: Payload is not a readable PDF.
            StorageError: Temporary file I/O failed.
        """
        ext = self.validate_file(filename, len(content or b""))

        if PDF_MAGIC not in content[:PDF_HEADER_WINDOW]:
            raise ExtractionError("File is not a valid PDF document")

        result = await asyncio.to_thread(self._extract_sync, content, ext)
        result.text = self._normalize_text(result.text)
        result.metadata.filename = self.sanitize_filename(filename)

        logger.debug(
            "Extracted %d chars from %s (%d pages)",
            len(result.text),
            result.metadata.filename,
            result.page_count,
        )
        return result

    def _normalize_text(self, text: str) -> str:
        """Normalize text by cleaning up whitespace."""
        text = re.sub(r"\n{3,}", "\n\n", text)
        text = re.sub(r" {2,}", " ", text)
        lines = [line.strip() for line in text.split("\n")]
        return "\n".join(lines).strip()

    def _extract_sync(self, content: bytes, suffix: str) -> ExtractedDocument:
        with temporary_upload(content, suffix) as temp_path:
            return self._parse_pdf_sync(temp_path)

    def _parse_pdf_sync(self, file_path: str) -> ExtractedDocument:
        """Parse PDF file using PyMuPDF (synchronous)."""
        doc = None
        try:
            doc = fitz.open(file_path)
            text_parts = []
            page_count = len(doc)
            if page_count == 0:
                raise ExtractionError("PDF contains no pages")

            for page_num, page in enumerate(doc, start=1):
                try:
                    page_text = page.get_text()
                    if page_text:
                        text_parts.append(page_text)
                except Exception as e:
                    logger.warning(
                        "Failed to extract text from page %d: %s", page_num, e
                    )

            metadata = DocumentMetadata(filename="")
            if doc.metadata:
                metadata.title = doc.metadata.get("title") or ""
                metadata.author = doc.metadata.get("author") or ""

            return ExtractedDocument(
                text="\n\n".join(text_parts),
                page_count=page_count,
                metadata=metadata,
            )

        except ExtractionError:
            raise
        except fitz.FileDataError as e:
            raise ExtractionError(f"Failed to parse PDF: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read upload: {e}") from e
        except Exception as e:
            raise ExtractionError(f"Failed to parse PDF: {e}") from e
        finally:
            if doc is not None:
                doc.close()
