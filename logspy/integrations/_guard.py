from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar


_forwarding: ContextVar[bool] = ContextVar("logspy_bridge_forwarding", default=False)


def is_forwarding() -> bool:
    """Whether the current chain is already inside a bridge forward."""
    return _forwarding.get()


@contextmanager
def forwarding() -> Iterator[None]:
    token = _forwarding.set(True)
    try:
        yield
    finally:
        _forwarding.reset(token)
