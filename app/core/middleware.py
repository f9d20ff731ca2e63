"""Custom middleware for the application with Prometheus metrics."""

import time
import uuid
from typing import Callable, Iterable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, PlainTextResponse

from app.config import normalize_origin
from app.constants import MSG_ORIGIN_REJECTED
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Define metrics
request_count = Counter(
    'feedback_api_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code']
)
request_duration = Histogram(
    'feedback_api_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint']
)
active_requests = Gauge('feedback_api_active_requests', 'Number of requests currently being processed')
rejected_origins = Counter('feedback_api_rejected_origins_total', 'Requests rejected by the origin allow-list')


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware to collect Prometheus metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Skip metrics collection for the metrics endpoint itself
        if request.url.path == "/metrics":
            return await call_next(request)

        start_time = time.perf_counter()
        method = request.method
        endpoint = self._get_endpoint_label(request.url.path)

        active_requests.inc()
        status_code = "500"
        try:
            response = await call_next(request)
            status_code = str(response.status_code)
            return response
        finally:
            duration = time.perf_counter() - start_time
            request_count.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
            request_duration.labels(method=method, endpoint=endpoint).observe(duration)
            active_requests.dec()

    def _get_endpoint_label(self, path: str) -> str:
        """Convert path to a metrics-friendly endpoint label."""
        # Group per-record endpoints to avoid metric explosion
        path = path.rstrip("/") or "/"
        if path.startswith("/api/feedback/"):
            if path.endswith("/status"):
                return "/api/feedback/{id}/status"
            return "/api/feedback/{id}"
        if path in ("/", "/api/health", "/api/feedback", "/api/chat"):
            return path
        return "other"


class TimingMiddleware(BaseHTTPMiddleware):
    """Middleware to add timing information to responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        # Add request ID
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        # Calculate processing time
        process_time = time.perf_counter() - start_time

        # Add headers
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(round(process_time, 4))

        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        # Skip logging for metrics endpoint to reduce noise
        if request.url.path != "/metrics":
            logger.info(f"{request.method} {request.url.path}")

        response = await call_next(request)

        if request.url.path != "/metrics":
            process_time = time.perf_counter() - start_time
            request_id = getattr(request.state, 'request_id', None)
            logger.debug(
                f"Request completed: {request.method} {request.url.path} - {response.status_code} - {round(process_time, 4)}s (ID: {request_id})"
            )

        return response


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """
    Cross-origin gate in front of CORSMiddleware.

    Requests without an Origin header (curl, server-to-server, mobile apps) pass.
    Requests with one must match the allow-list exactly after trailing-slash
    normalization, otherwise they are rejected before routing. Response headers
    and preflight replies are left to CORSMiddleware.
    """

    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = {normalize_origin(origin) for origin in allowed_origins if origin}

    def is_allowed(self, origin: str) -> bool:
        return normalize_origin(origin) in self.allowed_origins

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        origin = request.headers.get("origin")
        if origin and not self.is_allowed(origin):
            logger.warning(f"Blocked by CORS: {origin}")
            rejected_origins.inc()
            return JSONResponse(
                status_code=403,
                content={"success": False, "message": MSG_ORIGIN_REJECTED},
            )
        return await call_next(request)


def get_metrics_response():
    """Generate Prometheus metrics response."""
    try:
        metrics_data = generate_latest()
        return PlainTextResponse(metrics_data, media_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}")
        return PlainTextResponse(
            f"# Error generating metrics: {e}\n",
            media_type="text/plain",
            status_code=500
        )
