"""
API Middleware

Each request gets an id that is bound into structlog's context together
with the warehouse resource being read (a table name, "dashboard" or
"health"). Log events emitted by the routes while serving the request,
such as table row counts, carry both.
"""

import time
import uuid
from typing import Callable, Optional

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

API_PREFIX = "/api/"


def resource_for_path(path: str) -> Optional[str]:
    """First path segment under /api: "/api/facts" -> "facts"."""
    if not path.startswith(API_PREFIX):
        return None
    return path[len(API_PREFIX):].split("/", 1)[0] or None


class WarehouseRequestMiddleware(BaseHTTPMiddleware):
    """Request id, structured access log and response headers"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        resource = resource_for_path(request.url.path)
        start_time = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id, resource=resource):
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("Request failed", method=request.method, path=request.url.path)
                raise

            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            log = logger.warning if response.status_code >= 500 else logger.info
            log(
                "Request served",
                method=request.method,
                path=request.url.path,
                query=request.url.query or None,
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Cache-Control"] = "no-store"
        return response
