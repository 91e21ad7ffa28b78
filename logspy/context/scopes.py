"""Per-call-chain stack of human-readable logging scopes."""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from contextvars import ContextVar
from types import MappingProxyType, TracebackType
from typing import Any


def render_scope_state(state: Any) -> str:
    """Render a scope state as the label stored on the stack.

    Mappings become ``"key: value"`` pairs joined by ``", "``; ``None`` becomes
    an empty string; anything else uses ``str()``.
    """
    if state is None:
        return ""
    if isinstance(state, Mapping):
        return ", ".join(f"{key}: {value}" for key, value in state.items())
    return str(state)


class _ScopeFrame:
    __slots__ = ("label",)

    def __init__(self, label: str) -> None:
        self.label = label


class ScopeHandle:
    """Removes the frame it pushed when closed, exactly once."""

    def __init__(self, stack: ScopeStack, frame: _ScopeFrame) -> None:
        self._stack = stack
        self._frame = frame
        self._closed = False

    @property
    def label(self) -> str:
        return self._frame.label

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._stack._remove(self._frame)

    def __enter__(self) -> ScopeHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class NullScope:
    """Scope handle that does nothing; returned when scopes are disabled."""

    label = ""

    def close(self) -> None:
        pass

    def __enter__(self) -> NullScope:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        pass


NULL_SCOPE = NullScope()

_stack_ids = itertools.count()

# Open frames of every ScopeStack, keyed by stack id. The mapping is replaced,
# never mutated, so each context keeps its own view.
_scope_frames: ContextVar[Mapping[int, tuple[_ScopeFrame, ...]]] = ContextVar(
    "logspy_scope_frames", default=MappingProxyType({})
)


class ScopeStack:
    """
    Logical scope stack, isolated per call chain.

    Frames live in an immutable tuple inside a module-level ContextVar: a
    child task inherits the frames open at its creation, and nothing it pushes
    is visible to its parent or siblings. Stacks never share frames.
    """

    def __init__(self) -> None:
        self._id = next(_stack_ids)

    def _get(self) -> tuple[_ScopeFrame, ...]:
        return _scope_frames.get().get(self._id, ())

    def _set(self, frames: tuple[_ScopeFrame, ...]) -> None:
        stacks = dict(_scope_frames.get())
        if frames:
            stacks[self._id] = frames
        else:
            stacks.pop(self._id, None)
        _scope_frames.set(MappingProxyType(stacks))

    def push(self, state: Any) -> ScopeHandle:
        """Push a scope label rendered from ``state``."""
        frame = _ScopeFrame(render_scope_state(state))
        self._set(self._get() + (frame,))
        return ScopeHandle(self, frame)

    def current(self) -> tuple[str, ...]:
        """Labels of the open scopes, outermost first."""
        return tuple(frame.label for frame in self._get())

    @property
    def depth(self) -> int:
        return len(self._get())

    def _remove(self, frame: _ScopeFrame) -> None:
        frames = self._get()
        if frame in frames:
            self._set(tuple(f for f in frames if f is not frame))
