"""POST /upload - Extract an uploaded PDF and make it the current document."""

import logging

from fastapi import Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from dependencies import get_document_store, get_text_extractor
from responses import ResponseCode, error_response, get_message
from services import (
    DocumentContextStore,
    ExtractionError,
    FileTooLargeError,
    StorageError,
    TextExtractor,
    UnsupportedFileTypeError,
    ValidationError,
)
from utils import get_request_id

logger = logging.getLogger(__name__)

UPLOAD_SUCCESS_MESSAGE = "Document processed successfully! You can now ask questions."
NO_TEXT_MESSAGE = (
    "Document processed, but no text could be found in it. "
    "Please upload a PDF with selectable text before asking questions."
)


# --- Response Schema ---


class UploadResponse(BaseModel):
    """Confirmation that the document is ready for questions."""

    message: str


# --- Error mapping ---

UPLOAD_ERROR_MAP = {
    ValidationError: ResponseCode.VALIDATION_ERROR,
    UnsupportedFileTypeError: ResponseCode.UNSUPPORTED_FILE_TYPE,
    FileTooLargeError: ResponseCode.FILE_TOO_LARGE,
    ExtractionError: ResponseCode.EXTRACTION_FAILED,
    StorageError: ResponseCode.STORAGE_ERROR,
}


# --- Handler ---


async def upload_document(
    http_request: Request,
    document: UploadFile | None = File(default=None),
    extractor: TextExtractor = Depends(get_text_extractor),
    store: DocumentContextStore = Depends(get_document_store),
) -> JSONResponse:
    """Upload a PDF and replace the current document with its text.

    Flow:
    1. Validate file (present, non-empty, size, type)
    2. Extract text (temp file removed afterwards)
    3. Replace the stored document

    A failure at any step leaves the previously stored document in place.
    """
    request_id = get_request_id(http_request)

    if document is None:
        logger.warning("[%s] Upload without file", request_id)
        return error_response(
            ResponseCode.VALIDATION_ERROR, "No file uploaded.", request_id
        )

    logger.info(
        "[%s] Upload: %s (%s bytes)", request_id, document.filename, document.size
    )

    try:
        # Reject on the declared size before buffering the body
        if document.size is not None:
            extractor.validate_file(document.filename or "", document.size)

        content = await document.read(extractor.max_file_size_bytes + 1)
        extracted = await extractor.extract(content, document.filename or "")

    except tuple(UPLOAD_ERROR_MAP.keys()) as e:
        code = UPLOAD_ERROR_MAP[type(e)]
        if code in (ResponseCode.EXTRACTION_FAILED, ResponseCode.STORAGE_ERROR):
            logger.error(
                "[%s] Error processing PDF: %s: %s", request_id, type(e).__name__, e
            )
            return error_response(code, get_message(code), request_id)

        logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
        return error_response(code, str(e), request_id)

    finally:
        await document.close()

    context = store.replace(
        extracted.text,
        filename=extracted.metadata.filename,
        page_count=extracted.page_count,
        title=extracted.metadata.title,
        author=extracted.metadata.author,
    )

    message = UPLOAD_SUCCESS_MESSAGE
    if not context.loaded:
        message = NO_TEXT_MESSAGE
        logger.warning(
            "[%s] %s has no extractable text (%d pages)",
            request_id,
            context.filename,
            extracted.page_count,
        )
    logger.info(
        "[%s] Stored %s: %d chars, %d pages",
        request_id,
        context.filename,
        len(context.text),
        extracted.page_count,
    )
    return JSONResponse(content=UploadResponse(message=message).model_dump())
