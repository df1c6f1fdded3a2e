"""Assistant routes - registers the generic generation endpoint."""

from fastapi import APIRouter

from apps.assistant.handlers import generate_content
from apps.assistant.handlers.generate_content import GenerateResponse

router = APIRouter(tags=["Assistant"])

# POST /generate - Send a prompt straight to the model
router.post("/generate", response_model=GenerateResponse)(generate_content)
