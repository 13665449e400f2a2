# app/middleware.py
"""
Request-processing steps composed around the handlers.

RequestLoggingMiddleware wraps every request. require_api_key is a route-level
dependency on the write routes, so it runs before the ProductIn body is
validated.
"""
import hmac
import logging
import time
from typing import Optional

from fastapi import Header, Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from .errors import UnauthorizedError
from .store import ProductStore

logger = logging.getLogger("app.requests")


# ---------------------------
# Logging
# ---------------------------
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        target = request.url.path
        if request.url.query:
            target += "?" + request.url.query
        logger.info("%s %s", request.method, target)
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, target, response.status_code, elapsed_ms)
        return response


# ---------------------------
# Store injection
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


# ---------------------------
# Authentication
# ---------------------------
def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> None:
    expected = request.app.state.settings.api_key
    if not x_api_key or not expected:
        raise UnauthorizedError()
    if not hmac.compare_digest(x_api_key.encode("utf-8"), expected.encode("utf-8")):
        raise UnauthorizedError()
