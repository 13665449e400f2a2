# app/errors.py
"""
Error taxonomy and the centralized error formatter.

Handlers and middleware raise ApiError subclasses; register_error_handlers
installs the only code that serializes the {"error": {...}} envelope.
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for failures that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(ApiError):
    status_code = 400


class UnauthorizedError(ApiError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class NotFoundError(ApiError):
    status_code = 404

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class InternalError(ApiError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


# ---------------------------
# Formatter
# ---------------------------
def error_body(message: str, status: int) -> dict:
    return {
        "error": {
            "message": message,
            "status": status,
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        }
    }


def _error_response(request: Request, status: int, message: str) -> JSONResponse:
    if status >= 500:
        logger.error("%s %s -> %d %s", request.method, request.url.path, status, message)
    else:
        logger.warning("%s %s -> %d %s", request.method, request.url.path, status, message)
    return JSONResponse(status_code=status, content=error_body(message, status))


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p not in ("query", "path", "body"))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    """Route every failure through the single error envelope."""

    @app.exception_handler(ApiError)
    async def handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        return _error_response(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(request, ValidationError.status_code, _describe_validation(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        # single log line, with traceback
        logger.exception("%s %s -> unexpected %s", request.method, request.url.path, type(exc).__name__)
        status = InternalError.status_code
        return JSONResponse(status_code=status, content=error_body(InternalError().message, status))
