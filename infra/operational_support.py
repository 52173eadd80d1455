from __future__ import annotations

import logging
import re
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Iterator

_TRACE_ID_CTX: ContextVar[str | None] = ContextVar("bp_trace_id", default=None)
_SLUG = re.compile(r"[^a-z0-9]+")


def create_trace_id(operation: str = "fin") -> str:
    """``<operation>-<utc stamp>-<8 hex>``, e.g. ``export-20241215120000-1a2b3c4d``."""
    slug = _SLUG.sub("-", (operation or "").strip().lower()).strip("-") or "fin"
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"{slug}-{stamp}-{uuid.uuid4().hex[:8]}"


def current_trace_id() -> str | None:
    return (_TRACE_ID_CTX.get() or "").strip() or None


@contextmanager
def bind_trace_id(trace_id: str | None = None, *, operation: str = "fin") -> Iterator[str]:
    """Tag every log line emitted inside the block with one trace id."""
    active = (trace_id or "").strip() or create_trace_id(operation)
    token = _TRACE_ID_CTX.set(active)
    try:
        yield active
    finally:
        _TRACE_ID_CTX.reset(token)


class TraceIdLogFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = current_trace_id() or "-"
        return True


__all__ = [
    "TraceIdLogFilter",
    "bind_trace_id",
    "create_trace_id",
    "current_trace_id",
]
