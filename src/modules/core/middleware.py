from typing import Callable

import structlog
from django.http import HttpRequest, HttpResponse

from shared.infrastructure.correlation import bind_correlation_id

logger = structlog.get_logger()

CORRELATION_HEADER = "X-Request-ID"


class CorrelationIdMiddleware:
    """Middleware that extracts or generates a correlation ID for each request.

    The id is read from ``X-Request-ID`` (a UUID4 is generated when absent),
    bound to the structlog context, forwarded to RPC handlers by
    ``RpcClient`` and echoed back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        cid = bind_correlation_id(request.headers.get(CORRELATION_HEADER))

        logger.info("request_started", method=request.method, path=request.get_full_path())
        response = self.get_response(request)
        logger.info(
            "request_finished",
            method=request.method,
            path=request.get_full_path(),
            status_code=response.status_code,
        )

        response[CORRELATION_HEADER] = cid
        return response
