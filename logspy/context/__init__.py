"""Ambient, chain-local context attached to every captured entry."""

from .correlation import (
    CorrelationScope,
    begin_correlation_scope,
    get_correlation_id,
    set_correlation_id,
)
from .execution import current_task_id, current_thread_id, current_trace_ids
from .scopes import NULL_SCOPE, NullScope, ScopeHandle, ScopeStack, render_scope_state


__all__ = [
    # Correlation
    "CorrelationScope",
    "begin_correlation_scope",
    "get_correlation_id",
    "set_correlation_id",
    # Scopes
    "ScopeStack",
    "ScopeHandle",
    "NullScope",
    "NULL_SCOPE",
    "render_scope_state",
    # Execution probes
    "current_thread_id",
    "current_task_id",
    "current_trace_ids",
]
