"""HTTP boundary adapter for RPC failures.

Installed as DRF's ``EXCEPTION_HANDLER``.  Every failure reaching a view
is rendered with the normalized ``{message, status}`` body and the same
HTTP status code, whichever operation produced it.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from shared.domain.errors import InternalError
from shared.infrastructure.rpc import RpcException, normalize_rpc_error

logger = structlog.get_logger(__name__)


def _http_status(code: int) -> int:
    # The body keeps the normalized status; the HTTP line needs a valid code.
    if 100 <= code <= 599:
        return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _render(error: Dict[str, Any]) -> Response:
    return Response(error, status=_http_status(error["status"]))


def rpc_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, RpcException):
        return _render(exc.error)

    response = exception_handler(exc, context)
    if response is not None:
        data = response.data
        message = data.get("detail", data) if isinstance(data, dict) else data
        return _render({"message": message, "status": response.status_code})

    logger.exception("http.unhandled_error", view=type(context.get("view")).__name__)
    return _render(normalize_rpc_error(InternalError()))
