"""Typed service errors shared by every module.

Each error carries the ``message`` and numeric ``status`` that end up in
the normalized ``{message, status}`` shape once it crosses the RPC
boundary (see ``shared.infrastructure.rpc.normalize_rpc_error``).
"""

from __future__ import annotations

from typing import Optional


class ServiceError(Exception):
    """Base class for errors raised by the Service Layer."""

    status: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(ServiceError):
    """The referenced entity has no live row."""

    status = 404
    default_message = "Not found"


class BadRequestError(ServiceError):
    """Malformed request, folded store failure or failed validation."""

    status = 400
    default_message = "request error"


class InternalError(ServiceError):
    """Unexpected, unclassified failure."""

    status = 500
    default_message = "Internal server error"
