"""POST /generate - Forward a free-form prompt to the model.

Backs the code review, prompt refinement, sentiment and code-runner
suggestion tools in the browser client. The prompt is passed through
untouched.
"""

import logging

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dependencies import get_llm_service
from llm import BaseLLMService, LLMError
from responses import ResponseCode, error_response
from utils import get_request_id, truncate_text

logger = logging.getLogger(__name__)


# --- Request/Response Schemas ---


class GenerateRequest(BaseModel):
    """Request body for the generate endpoint."""

    prompt: str | None = Field(None, description="Prompt sent as-is to the model")


class GenerateResponse(BaseModel):
    """Generated text."""

    response: str


# --- Handler ---


async def generate_content(
    request: GenerateRequest,
    http_request: Request,
    llm: BaseLLMService = Depends(get_llm_service),
) -> JSONResponse:
    """Generate text for an arbitrary prompt."""
    request_id = get_request_id(http_request)

    if not request.prompt or not request.prompt.strip():
        logger.warning("[%s] Generate rejected: empty prompt", request_id)
        return error_response(
            ResponseCode.VALIDATION_ERROR, "Prompt is required", request_id
        )

    logger.info("[%s] Generate: %s", request_id, truncate_text(request.prompt))

    try:
        text = await llm.generate(request.prompt)
    except LLMError as e:
        logger.error(
            "[%s] Error in /api/generate (%s): %s", request_id, e.kind.value, e
        )
        return error_response(
            ResponseCode.GENERATION_FAILED,
            "Failed to generate content",
            request_id,
            {"retryable": e.retryable},
        )

    return JSONResponse(content=GenerateResponse(response=text).model_dump())
