"""Main FastAPI application for EaseAI.

Entry point for the application. Configures:
- FastAPI app with settings
- CORS middleware
- Exception handlers
- Route registration
- Static file serving for the browser client
"""

import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import get_app_config, get_cors_config, get_settings, setup_logging
from dependencies import get_document_store, get_llm_service
from middleware import RateLimitMiddleware
from responses import ResponseCode, error_dict, get_http_status
from router import router as api_router

# Path to the static browser client
PUBLIC_DIR = Path(__file__).parent.parent / "public"

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Management
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting EaseAI...")

    try:
        # Missing ANTHROPIC_API_KEY fails here, before any request is served
        settings = get_settings()
        logging.getLogger().setLevel(settings.log_level.upper())
        logger.info("Environment: %s", settings.environment)
        logger.info("LLM Model: %s", settings.llm_model)
        logger.info(
            "Context budget: %d chars, max output: %d tokens, retries: %d",
            settings.context_char_budget,
            settings.llm_max_tokens,
            settings.llm_max_retries,
        )

        get_document_store()
        get_llm_service()
        logger.info("EaseAI started successfully")

    except Exception as e:
        logger.error("Startup validation failed: %s", e)
        raise

    yield

    # Shutdown
    logger.info("Shutting down EaseAI...")


# Create FastAPI app with lifespan
app_config = get_app_config()
app = FastAPI(lifespan=lifespan, **app_config)

# Add CORS middleware
cors_config = get_cors_config()
app.add_middleware(CORSMiddleware, **cors_config)

# Add rate limiting middleware (protects LLM endpoints)
app.add_middleware(RateLimitMiddleware)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests for tracing."""
    request_id = str(uuid.uuid4())[:8]
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================

# Framework HTTP errors mapped onto the API's error codes
HTTP_ERROR_CODES = {
    400: ResponseCode.VALIDATION_ERROR,
    404: ResponseCode.NOT_FOUND,
    405: ResponseCode.VALIDATION_ERROR,
    413: ResponseCode.FILE_TOO_LARGE,
    429: ResponseCode.RATE_LIMITED,
}


def _error_json(
    request: Request,
    code: ResponseCode,
    message: str,
    status_code: int | None = None,
    details: dict | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code or get_http_status(code),
        content=error_dict(
            code,
            message,
            error_details=details,
            request_id=getattr(request.state, "request_id", None),
        ),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report unparseable or mistyped bodies as 400, not FastAPI's 422."""
    errors = exc.errors()
    loc = errors[0].get("loc", ()) if errors else ()
    field = loc[-1] if loc else "body"

    return _error_json(
        request,
        ResponseCode.VALIDATION_ERROR,
        f"Invalid value for '{field}'",
        details={
            "validation_errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in errors
            ]
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    code = HTTP_ERROR_CODES.get(exc.status_code, ResponseCode.INTERNAL_ERROR)
    return _error_json(
        request,
        code,
        str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback, return a generic 500."""
    logger.exception(
        "[%s] Unhandled exception on %s: %s",
        getattr(request.state, "request_id", None),
        request.url.path,
        exc,
    )
    return _error_json(
        request, ResponseCode.INTERNAL_ERROR, "An unexpected error occurred"
    )


# =============================================================================
# Routes
# =============================================================================

# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/api", tags=["Health"])
async def api_info():
    """Simple test route."""
    return {"message": "Welcome to EaseAi API!"}


# Serve the browser client if available
if PUBLIC_DIR.exists():
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")
else:

    @app.get("/", include_in_schema=False)
    async def root():
        """Root endpoint - shows API info in development."""
        return {
            "name": "EaseAI",
            "description": "Assistant suite backend",
            "docs": "/api/docs",
            "health": "/api/health",
            "note": "Static client not found. Place it in the 'public' directory.",
        }


# =============================================================================
# Development Server
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=3000,
        reload=True,
    )
