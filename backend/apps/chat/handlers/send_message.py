"""POST /chat - Answer a question from the current document.

Orchestrates the chat flow:
1. Read the current document
2. Validate and build the grounding prompt
3. Generate the answer
"""

import logging

from fastapi import Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from dependencies import get_document_store, get_llm_service, get_prompt_builder
from llm import BaseLLMService, LLMError
from llm.prompts import DOCUMENT_QA_SYSTEM_PROMPT
from responses import ResponseCode, error_response
from services import (
    ContextPromptBuilder,
    DocumentContextStore,
    PreconditionError,
    ValidationError,
)
from utils import get_request_id, truncate_text

logger = logging.getLogger(__name__)


# --- Request/Response Schemas ---


class ChatRequest(BaseModel):
    """Request body for chat endpoint."""

    question: str | None = Field(
        None, description="Natural language question about the document"
    )


class ChatResponse(BaseModel):
    """Answer produced by the model."""

    response: str


# --- Error mapping ---

CHAT_ERROR_MAP = {
    PreconditionError: ResponseCode.DOCUMENT_REQUIRED,
    ValidationError: ResponseCode.VALIDATION_ERROR,
}


# --- Handler ---


async def send_message(
    request: ChatRequest,
    http_request: Request,
    store: DocumentContextStore = Depends(get_document_store),
    prompt_builder: ContextPromptBuilder = Depends(get_prompt_builder),
    llm: BaseLLMService = Depends(get_llm_service),
) -> JSONResponse:
    """Answer a question using only the uploaded document.

    The question is answered against whatever document is current when the
    request is processed.
    """
    request_id = get_request_id(http_request)

    try:
        prompt = prompt_builder.build(store.current(), request.question)
    except tuple(CHAT_ERROR_MAP.keys()) as e:
        logger.warning("[%s] Chat rejected: %s", request_id, e)
        return error_response(CHAT_ERROR_MAP[type(e)], str(e), request_id)

    logger.info("[%s] Chat request: %s", request_id, truncate_text(request.question))

    try:
        answer = await llm.generate(prompt, DOCUMENT_QA_SYSTEM_PROMPT)
    except LLMError as e:
        logger.error("[%s] Error in /api/chat (%s): %s", request_id, e.kind.value, e)
        return error_response(
            ResponseCode.GENERATION_FAILED,
            "Failed to chat with document.",
            request_id,
            {"retryable": e.retryable},
        )

    return JSONResponse(content=ChatResponse(response=answer).model_dump())
