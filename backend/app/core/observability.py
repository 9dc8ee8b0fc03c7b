"""
Observability middleware and logging setup.

Every request gets a correlation id (taken from ``X-Correlation-ID`` when the
caller sends one) that is echoed back on the response and attached to the
request log line together with timing and, once the auth gate has run, the
caller's user id.
"""

import time
import uuid
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("titan_cargo.requests")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
CORRELATION_HEADER = "X-Correlation-ID"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(format=LOG_FORMAT, level=getattr(logging, level.upper(), logging.INFO))


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def _caller_id(request: Request):
    # Set by get_current_user on protected routes only
    user = getattr(request.state, "user", None)
    return user.get("user_id") if user else None


class ObservabilityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s failed after %.1fms [cid=%s]",
                request.method, request.url.path, (time.perf_counter() - started) * 1000, correlation_id
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Process-Time"] = f"{duration_ms:.2f}"

        logger.log(
            _level_for(response.status_code),
            "%s %s -> %s (%.1fms)",
            request.method, request.url.path, response.status_code, duration_ms,
            extra={
                "correlation_id": correlation_id,
                "user_id": _caller_id(request),
                "client_ip": request.client.host if request.client else None,
            }
        )
        return response
