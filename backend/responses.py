"""Standardized error responses for API endpoints.

Success bodies are endpoint specific (`{"response": ...}`, `{"message": ...}`).
Error bodies always carry a human-readable `error` plus a stable `code`
so the browser client can branch on success vs. failure.
"""

from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse


class ResponseCode(str, Enum):
    """Error codes for API responses."""

    # Client errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    DOCUMENT_REQUIRED = "DOCUMENT_REQUIRED"
    UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"

    # Server errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    STORAGE_ERROR = "STORAGE_ERROR"

    # External service errors
    GENERATION_FAILED = "GENERATION_FAILED"


# Response messages mapped to codes
RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.VALIDATION_ERROR: "Request validation failed",
    ResponseCode.DOCUMENT_REQUIRED: "Please upload a document first.",
    ResponseCode.UNSUPPORTED_FILE_TYPE: "Unsupported file type. Supported: PDF",
    ResponseCode.FILE_TOO_LARGE: "File exceeds maximum allowed size",
    ResponseCode.NOT_FOUND: "Resource not found",
    ResponseCode.RATE_LIMITED: "Rate limit exceeded. Please wait and retry",
    ResponseCode.INTERNAL_ERROR: "An internal error occurred",
    ResponseCode.EXTRACTION_FAILED: "Failed to process document.",
    ResponseCode.STORAGE_ERROR: "Failed to store the uploaded file.",
    ResponseCode.GENERATION_FAILED: "Failed to generate content",
}

# HTTP status codes for each response code
HTTP_STATUS_MAP: dict[ResponseCode, int] = {
    ResponseCode.VALIDATION_ERROR: 400,
    ResponseCode.DOCUMENT_REQUIRED: 400,
    ResponseCode.UNSUPPORTED_FILE_TYPE: 400,
    ResponseCode.FILE_TOO_LARGE: 413,
    ResponseCode.NOT_FOUND: 404,
    ResponseCode.RATE_LIMITED: 429,
    ResponseCode.INTERNAL_ERROR: 500,
    ResponseCode.EXTRACTION_FAILED: 500,
    ResponseCode.STORAGE_ERROR: 500,
    ResponseCode.GENERATION_FAILED: 500,
}


def get_message(code: ResponseCode) -> str:
    """Get the message for a response code."""
    return RESPONSE_MESSAGES.get(code, "Unknown error")


def get_http_status(code: ResponseCode) -> int:
    """Get HTTP status code for a response code."""
    return HTTP_STATUS_MAP.get(code, 500)


def error_dict(
    code: ResponseCode,
    custom_message: str | None = None,
    error_details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build a standardized error response dictionary."""
    body: dict[str, Any] = {
        "error": custom_message or get_message(code),
        "code": code.value,
        "request_id": request_id,
    }
    if error_details:
        body.update(error_details)
    return body


# --- JSONResponse helpers ---


def error_response(
    code: ResponseCode,
    custom_message: str | None = None,
    request_id: str | None = None,
    error_details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a JSONResponse with error format."""
    return JSONResponse(
        content=error_dict(code, custom_message, error_details, request_id),
        status_code=get_http_status(code),
    )
