"""Document routes - registers all document endpoints."""

from fastapi import APIRouter

from apps.documents.handlers import get_document, upload_document
from apps.documents.handlers.get_document import DocumentStatusResponse
from apps.documents.handlers.upload_document import UploadResponse

router = APIRouter(tags=["Documents"])

# POST /upload - Upload document
router.post("/upload", response_model=UploadResponse)(upload_document)

# GET /document - Current document status
router.get("/document", response_model=DocumentStatusResponse)(get_document)
