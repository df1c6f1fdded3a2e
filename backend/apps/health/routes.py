"""Health routes - registers the status endpoint."""

from fastapi import APIRouter

from apps.health.handlers import check_health
from apps.health.handlers.check_health import HealthResponse

router = APIRouter(prefix="/health", tags=["Health"])

# GET /health - Service status and whether a document is loaded
router.get("", response_model=HealthResponse)(check_health)
