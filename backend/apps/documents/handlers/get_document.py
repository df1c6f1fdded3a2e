"""GET /document - Describe the document currently held in memory."""

from datetime import datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from dependencies import get_document_store
from services import DocumentContextStore

# --- Response Schema ---


class DocumentStatusResponse(BaseModel):
    """Status of the current document."""

    loaded: bool = Field(..., description="Whether questions can be asked")
    filename: str | None = Field(None, description="Sanitized upload filename")
    characters: int = Field(..., description="Length of the extracted text")
    page_count: int | None = Field(None, description="Number of PDF pages")
    title: str | None = Field(None, description="Title from the PDF metadata")
    author: str | None = Field(None, description="Author from the PDF metadata")
    uploaded_at: datetime | None = Field(None, description="When it was stored")


# --- Handler ---


async def get_document(
    store: DocumentContextStore = Depends(get_document_store),
) -> DocumentStatusResponse:
    """Return metadata for the current document."""
    context = store.snapshot()
    return DocumentStatusResponse(
        loaded=context.loaded,
        filename=context.filename,
        characters=len(context.text),
        page_count=context.page_count,
        title=context.title,
        author=context.author,
        uploaded_at=context.uploaded_at,
    )
