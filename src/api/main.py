"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from api.dependencies import create_store
from api.routers import bookmarks, health, lists
from core.config import get_settings
from schemas.errors import ErrorResponse
from services.exceptions import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - create the store on startup, release it on shutdown."""
    app_settings = get_settings()

    store = create_store(app_settings)
    await store.startup()
    app.state.store = store
    logger.info("Store ready (backend=%s)", app_settings.store_backend)

    yield

    await store.shutdown()
    app.state.store = None


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and add security headers to response."""
        response = await call_next(request)
        # HSTS: enforce HTTPS for 1 year, including subdomains
        response.headers["Strict-Transport-Security"] = (
            "max-age=31536000; includeSubDomains"
        )
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Prevent clickjacking - API shouldn't be framed
        response.headers["X-Frame-Options"] = "DENY"
        return response


def error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON response with the ``{"error": {"message": ...}}`` envelope."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.from_message(message).model_dump(),
        headers=headers,
    )


def request_validation_message(exc: RequestValidationError) -> str:
    """Turn FastAPI's first request validation error into a single message."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    if error.get("type") == "json_invalid":
        return "Request body must be valid JSON"
    loc = [str(part) for part in error.get("loc", ()) if part != "body"]
    if not loc:
        return "Request body must be a JSON object"
    return f"Invalid '{loc[-1]}': {error.get('msg', 'invalid value')}"


app_settings = get_settings()

app = FastAPI(
    title="Bookmarks API",
    description="A bookmark management service with validated, sanitized records and lists.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ValidationError)
async def validation_exception_handler(
    request: Request, exc: ValidationError,
) -> JSONResponse:
    """Rejected payloads - 400 with the field message."""
    logger.error("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return error_response(400, exc.message)


@app.exception_handler(NotFoundError)
async def not_found_exception_handler(
    _request: Request, exc: NotFoundError,
) -> JSONResponse:
    """Unknown ids - 404."""
    return error_response(404, exc.message)


@app.exception_handler(StoreError)
async def store_exception_handler(
    request: Request, _exc: StoreError,
) -> JSONResponse:
    """Persistence failures - 500 with a generic message; details are only logged."""
    logger.error("Store failure during %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Malformed requests (bad JSON, non-integer ids) - 400 instead of FastAPI's 422."""
    message = request_validation_message(exc)
    logger.error("Rejected %s %s: %s", request.method, request.url.path, message)
    return error_response(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    _request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    """Re-envelope HTTP errors (401, 405, unknown routes) in the error format."""
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


# Security headers middleware (runs after CORS, adds headers to responses)
app.add_middleware(SecurityHeadersMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(bookmarks.router)
app.include_router(lists.router)


def main() -> None:
    """Entry point for running the API with uvicorn."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
