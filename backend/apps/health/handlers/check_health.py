"""GET /health - Report service status."""

from datetime import UTC, datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from config import APP_CONFIG, get_settings
from dependencies import get_document_store
from services import DocumentContextStore

# --- Response Schemas ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    model: str = Field(..., description="Model used for generation")
    document_loaded: bool = Field(..., description="Whether a document is in memory")
    timestamp: datetime


# --- Handler ---


async def check_health(
    store: DocumentContextStore = Depends(get_document_store),
) -> HealthResponse:
    """Check health of the service."""
    settings = get_settings()

    return HealthResponse(
        status="healthy",
        version=APP_CONFIG["version"],
        environment=settings.environment,
        model=settings.llm_model,
        document_loaded=store.snapshot().loaded,
        timestamp=datetime.now(UTC),
    )
