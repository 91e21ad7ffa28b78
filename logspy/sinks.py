"""
Out-of-band destinations for rendered log text.

A sink receives text only after the entry has been captured. Every sink
swallows its own write failures and releases its resources exactly once.
"""

from __future__ import annotations

import queue
import sys
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from pathlib import Path
from types import TracebackType
from typing import Any, Protocol, TextIO, runtime_checkable

from logspy.core.errors import ConfigurationError
from logspy.core.logging import get_logger


logger = get_logger(__name__)


@runtime_checkable
class LogSink(Protocol):
    """Fire-and-forget text destination."""

    def write(self, text: str) -> None: ...

    def close(self) -> None: ...


class BaseSink(ABC):
    """Base class handling failure isolation and close-once semantics."""

    def __init__(self) -> None:
        self._closed = False
        self._close_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, text: str) -> None:
        if self._closed:
            return
        try:
            self._write(text)
        except Exception as e:
            logger.warning(
                "sink_write_failed",
                sink=type(self).__name__,
                error=str(e),
                error_type=type(e).__name__,
            )

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        try:
            self._close()
        except Exception as e:
            logger.warning(
                "sink_close_failed", sink=type(self).__name__, error=str(e)
            )

    @abstractmethod
    def _write(self, text: str) -> None:
        """Write rendered text; may raise, the caller swallows."""

    def _close(self) -> None:
        """Release owned resources."""
        return None

    def __enter__(self) -> BaseSink:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()


class CallbackSink(BaseSink):
    """Forwards text to a callable, e.g. a test runner's output writer."""

    def __init__(self, callback: Callable[[str], Any]) -> None:
        super().__init__()
        if callback is None:
            raise ConfigurationError("CallbackSink requires a callback", setting="callback")
        self._callback = callback

    def _write(self, text: str) -> None:
        self._callback(text)


class StreamSink(BaseSink):
    """Writes each text on its own line to a text stream (stderr by default)."""

    def __init__(self, stream: TextIO | None = None, close_stream: bool = False) -> None:
        super().__init__()
        self._stream = stream
        self._close_stream = close_stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so pytest's capture replacement of stderr is honoured
        return self._stream if self._stream is not None else sys.stderr

    def _write(self, text: str) -> None:
        with self._lock:
            self.stream.write(text + "\n")
            self.stream.flush()

    def _close(self) -> None:
        if self._close_stream and self._stream is not None:
            self._stream.close()


class FileSink(BaseSink):
    """Appends each text as a line to a file it owns."""

    def __init__(self, path: str | Path, encoding: str = "utf-8", mode: str = "a") -> None:
        super().__init__()
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.path.open(mode, encoding=encoding)
        self._lock = threading.Lock()

    def _write(self, text: str) -> None:
        with self._lock:
            self._file.write(text + "\n")
            self._file.flush()

    def _close(self) -> None:
        with self._lock:
            self._file.close()


_STOP = object()


class BackgroundSink(BaseSink):
    """
    Moves writes of an inner sink onto a daemon worker thread.

    ``write`` only enqueues, so a slow inner sink never delays the logging
    call. ``close`` drains pending text and closes the inner sink.
    """

    def __init__(self, inner: LogSink, drain_timeout: float = 5.0) -> None:
        super().__init__()
        self.inner = inner
        self.drain_timeout = drain_timeout
        self._queue: queue.Queue[Any] = queue.Queue()
        self._worker = threading.Thread(
            target=self._run, name="logspy-background-sink", daemon=True
        )
        self._worker.start()

    def _write(self, text: str) -> None:
        self._queue.put_nowait(text)

    def flush(self) -> None:
        """Block until every queued text has been handed to the inner sink."""
        self._queue.join()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self.inner.write(item)
            except Exception as e:
                logger.warning("background_sink_write_failed", error=str(e))
            finally:
                self._queue.task_done()

    def _close(self) -> None:
        self._queue.put_nowait(_STOP)
        self._worker.join(self.drain_timeout)
        if self._worker.is_alive():
            logger.warning(
                "background_sink_drain_timeout",
                pending=self._queue.qsize(),
                timeout=self.drain_timeout,
            )
        self.inner.close()
