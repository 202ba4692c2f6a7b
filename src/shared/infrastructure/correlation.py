"""Correlation id shared by HTTP requests and RPC handlers."""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Optional

import structlog

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def bind_correlation_id(cid: Optional[str] = None, **extra: str) -> str:
    """Store ``cid`` (or a new UUID4) and bind it to every log line."""
    cid = cid or str(uuid.uuid4())
    correlation_id_var.set(cid)
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(correlation_id=cid, **extra)
    return cid


def current_correlation_id() -> str:
    return correlation_id_var.get()
