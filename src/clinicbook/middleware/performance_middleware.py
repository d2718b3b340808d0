"""
Request timing middleware: latency log line, X-Process-Time header and HTTP metrics.
"""
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..observability.metrics import record_http_request

logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0
# Probes hit these every few seconds; keep them out of INFO logs
QUIET_PATH_PREFIXES = ("/health",)


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Time every request and report it by route template, not raw path."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        latency_ms = round(elapsed * 1000, 2)

        request_id = getattr(request.state, "request_id", "unknown")
        path = request.url.path
        route = request.scope.get("route")
        route_path = getattr(route, "path", path)

        log = logger.debug if path.startswith(QUIET_PATH_PREFIXES) else logger.info
        log(
            f"HTTP {request.method} {path} -> {response.status_code} in {latency_ms}ms "
            f"request_id={request_id}",
            extra={"request_id": request_id},
        )
        record_http_request(request.method, route_path, response.status_code, latency_ms)
        response.headers["X-Process-Time"] = str(latency_ms)

        if elapsed > SLOW_REQUEST_SECONDS:
            logger.warning(
                f"SLOW_REQUEST: {request.method} {route_path} took {latency_ms}ms "
                f"request_id={request_id}"
            )
        return response
