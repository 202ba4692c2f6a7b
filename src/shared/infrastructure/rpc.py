"""Message-based RPC over Celery.

- ``normalize_rpc_error``: coerces any raised value into ``{message, status}``.
- ``RpcException``: a normalized error travelling back to the caller.
- ``rpc_handler``: wraps a task body so it always answers with an envelope
  (``{"ok": True, "data": ...}`` or ``{"ok": False, "error": {...}}``).
- ``RpcClient``: dispatches a payload to a method pattern and returns an
  explicit ``Ok`` / ``Err`` result.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

import structlog
from celery import Celery, current_app
from pydantic import ValidationError as PydanticValidationError

from shared.domain.errors import BadRequestError, InternalError, ServiceError
from shared.domain.result import Err, Ok, Result
from shared.infrastructure.correlation import bind_correlation_id, current_correlation_id

logger = structlog.get_logger(__name__)

CORRELATION_HEADER = "correlation_id"


# ---------------------------------------------------------------------------
# Error normalization
# ---------------------------------------------------------------------------


def _coerce_status(status: Any) -> int:
    """Return ``status`` as an int, or 400 when it is not numeric."""
    if isinstance(status, bool):
        return 400
    if isinstance(status, int):
        return status
    try:
        number = float(status)
    except (TypeError, ValueError):
        return 400
    if not math.isfinite(number):
        return 400
    return int(number)


def normalize_rpc_error(error: Any) -> Dict[str, Any]:
    """Coerce ``error`` into the ``{message, status}`` shape.

    >>> normalize_rpc_error("oops")
    {'message': 'oops', 'status': 400}
    >>> normalize_rpc_error({"status": "abc", "message": "x"})
    {'message': 'x', 'status': 400}
    >>> normalize_rpc_error(42)
    {'message': 42, 'status': 500}
    """
    if isinstance(error, str):
        return {"message": error, "status": 400}

    if isinstance(error, Mapping):
        if "status" in error and "message" in error:
            return {"message": error["message"], "status": _coerce_status(error["status"])}
    elif hasattr(error, "status") and hasattr(error, "message"):
        return {"message": error.message, "status": _coerce_status(error.status)}

    if isinstance(error, BaseException):
        return {"message": str(error), "status": 500}
    return {"message": error, "status": 500}


class RpcException(Exception):
    """A failed RPC call, already in normalized form."""

    def __init__(self, error: Any) -> None:
        self.error = normalize_rpc_error(error)
        super().__init__(self.error["message"])

    @property
    def message(self) -> Any:
        return self.error["message"]

    @property
    def status(self) -> int:
        return self.error["status"]


# ---------------------------------------------------------------------------
# Server side
# ---------------------------------------------------------------------------


def _validation_message(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ())) or "payload"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def _request_correlation_id(request: Any) -> Optional[str]:
    # Eager calls expose custom headers on ``request.headers``; workers
    # merge them onto the request itself.
    headers = getattr(request, "headers", None) or {}
    return headers.get(CORRELATION_HEADER) or getattr(request, CORRELATION_HEADER, None)


def rpc_handler(func: Callable[[Dict[str, Any]], Any]) -> Callable[..., Dict[str, Any]]:
    """Turn ``func(payload)`` into a bound Celery task body answering envelopes.

    Usage::

        @shared_task(name="find_one_product", bind=True)
        @rpc_handler
        def find_one_product(payload): ...
    """

    @functools.wraps(func)
    def wrapper(task, payload=None):
        bind_correlation_id(_request_correlation_id(task.request), pattern=task.name)
        log = logger.bind(pattern=task.name)

        try:
            data = func(payload if payload is not None else {})
        except ServiceError as exc:
            error = normalize_rpc_error(exc)
        except PydanticValidationError as exc:
            error = normalize_rpc_error(BadRequestError(_validation_message(exc)))
        except Exception:
            log.exception("rpc.unhandled_error")
            error = normalize_rpc_error(InternalError())
        else:
            log.info("rpc.request_completed")
            return {"ok": True, "data": data}

        log.warning("rpc.request_failed", status=error["status"], message=error["message"])
        return {"ok": False, "error": error}

    return wrapper


# ---------------------------------------------------------------------------
# Client side
# ---------------------------------------------------------------------------


class RpcClient:
    """Request/response client addressing handlers by method pattern.

    Calls block until the handler answers; there is no timeout or retry.
    """

    def __init__(self, app: Optional[Celery] = None) -> None:
        self._app = app or current_app

    def send(self, pattern: str, payload: Any) -> Result:
        """Dispatch ``payload`` to ``pattern`` and decode the envelope."""
        signature = self._app.signature(pattern, args=(payload,))
        async_result = signature.apply_async(
            headers={CORRELATION_HEADER: current_correlation_id()}
        )
        envelope = async_result.get()

        if isinstance(envelope, Mapping) and envelope.get("ok"):
            return Ok(envelope.get("data"))
        if isinstance(envelope, Mapping) and "error" in envelope:
            return Err(RpcException(envelope["error"]))
        return Err(RpcException(envelope))
