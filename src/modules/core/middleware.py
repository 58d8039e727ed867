"""Request correlation for the API.

Every request is tagged with an ``X-Request-ID``.  The id is bound into
structlog's context so service-layer events (``order.created``,
``book.stock_updated`` ...) carry it, and it is echoed back to the client.
"""

import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

REQUEST_ID_HEADER = "X-Request-ID"

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware:
    """Reuse the caller's ``X-Request-ID`` or mint a UUID4 one."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=request_id)
        started = time.perf_counter()

        logger.info("http.request.started", method=request.method, path=request.path)
        try:
            response = self.get_response(request)
            logger.info(
                "http.request.finished",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response[REQUEST_ID_HEADER] = request_id
        return response
