"""Probes for the execution context a log call runs in."""

from __future__ import annotations

import asyncio
import threading

from opentelemetry import trace
from opentelemetry.trace import INVALID_SPAN_ID, INVALID_TRACE_ID


def current_thread_id() -> int:
    return threading.get_ident()


def current_task_id() -> int | None:
    """Identity of the running asyncio task, or None outside one."""
    try:
        task = asyncio.current_task()
    except RuntimeError:
        # No running event loop in this thread
        return None
    if task is None:
        return None
    return id(task)


def current_trace_ids() -> tuple[str | None, str | None]:
    """Trace and span id of the active OpenTelemetry span.

    Returns ``(None, None)`` when no valid span is active. The span is only
    read, never created or modified.
    """
    ctx = trace.get_current_span().get_span_context()
    if ctx.trace_id == INVALID_TRACE_ID or ctx.span_id == INVALID_SPAN_ID:
        return None, None
    # Format as 32-char hex for trace_id, 16-char hex for span_id
    return format(ctx.trace_id, "032x"), format(ctx.span_id, "016x")
