import time
import uuid
from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

logger = structlog.get_logger(__name__)

# Polled by the load balancer every few seconds.
QUIET_PATHS = frozenset({"/health"})


class CorrelationIdMiddleware:
    """Binds a correlation id to every log line of a request.

    Reads the ``X-Request-ID`` header (the storefront and the admin page
    send one per action) or generates a UUID4.  The id lives in
    structlog's contextvars, so order submissions and print jobs can be
    traced end to end, and is echoed back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = request.META.get("HTTP_X_REQUEST_ID") or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        quiet = request.path in QUIET_PATHS
        started = time.monotonic()
        if not quiet:
            logger.info("request.started", method=request.method, path=request.path)

        response = self.get_response(request)

        if not quiet:
            logger.info(
                "request.finished",
                method=request.method,
                path=request.path,
                status_code=response.status_code,
                duration_ms=round((time.monotonic() - started) * 1000, 2),
            )

        response["X-Request-ID"] = cid
        return response
