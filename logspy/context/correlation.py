"""Correlation id for the current logical call chain.

The id lives in a :class:`~contextvars.ContextVar`, so it follows asyncio
continuations and tasks spawned from the chain that set it, while sibling
tasks and other threads keep their own value.
"""

from contextvars import ContextVar
from types import TracebackType


_correlation_context: ContextVar[str] = ContextVar("logspy_correlation_id", default="")


def get_correlation_id() -> str:
    """Get the correlation id of the current call chain ("" when unset)."""
    return _correlation_context.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set the correlation id for the rest of the current call chain."""
    _correlation_context.set(correlation_id or "")


class CorrelationScope:
    """Handle that restores the previous correlation id when closed.

    The new id is applied as soon as the scope is created, so the handle can be
    used either with ``with``/``async with`` or closed explicitly.
    """

    def __init__(self, correlation_id: str | None) -> None:
        self.correlation_id = correlation_id or ""
        self._previous = _correlation_context.get()
        self._closed = False
        _correlation_context.set(self.correlation_id)

    def close(self) -> None:
        """Restore the id that was current before this scope began."""
        if self._closed:
            return
        self._closed = True
        # May run in a different Context than __init__, so no Token.reset()
        _correlation_context.set(self._previous)

    def __enter__(self) -> "CorrelationScope":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    async def __aenter__(self) -> "CorrelationScope":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


def begin_correlation_scope(correlation_id: str | None) -> CorrelationScope:
    """Set the correlation id for the current chain until the scope closes.

    Example:
        with begin_correlation_scope("test-42"):
            logger.info("tagged with test-42")
    """
    return CorrelationScope(correlation_id)
