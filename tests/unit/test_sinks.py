"""Tests for sink failure isolation, close-once semantics and output."""

import io
import threading
import time
from pathlib import Path

import pytest

from logspy.core.errors import ConfigurationError
from logspy.sinks import BackgroundSink, CallbackSink, FileSink, LogSink, StreamSink


class RecordingSink:
    def __init__(self, delay: float = 0.0) -> None:
        self.texts: list[str] = []
        self.close_calls = 0
        self.delay = delay

    def write(self, text: str) -> None:
        if self.delay:
            time.sleep(self.delay)
        self.texts.append(text)

    def close(self) -> None:
        self.close_calls += 1


@pytest.mark.unit
class TestCallbackSink:
    def test_forwards_text(self) -> None:
        received: list[str] = []
        sink = CallbackSink(received.append)
        sink.write("hello")
        assert received == ["hello"]

    def test_requires_callback(self) -> None:
        with pytest.raises(ConfigurationError):
            CallbackSink(None)  # type: ignore[arg-type]

    def test_callback_failure_is_swallowed(self) -> None:
        def broken(text: str) -> None:
            raise OSError("pipe closed")

        sink = CallbackSink(broken)
        sink.write("ignored")

    def test_writes_after_close_are_dropped(self) -> None:
        received: list[str] = []
        sink = CallbackSink(received.append)
        sink.close()
        sink.close()
        sink.write("late")
        assert received == []
        assert sink.closed

    def test_satisfies_protocol(self) -> None:
        assert isinstance(CallbackSink(print), LogSink)


@pytest.mark.unit
class TestStreamSink:
    def test_writes_lines(self) -> None:
        stream = io.StringIO()
        sink = StreamSink(stream)
        sink.write("one")
        sink.write("two")
        assert stream.getvalue() == "one\ntwo\n"

    def test_does_not_close_borrowed_stream(self) -> None:
        stream = io.StringIO()
        StreamSink(stream).close()
        assert not stream.closed

    def test_closes_owned_stream(self) -> None:
        stream = io.StringIO()
        StreamSink(stream, close_stream=True).close()
        assert stream.closed

    def test_defaults_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        StreamSink().write("to stderr")
        assert capsys.readouterr().err == "to stderr\n"


@pytest.mark.unit
class TestFileSink:
    def test_appends_lines(self, tmp_path: Path) -> None:
        path = tmp_path / "logs" / "out.log"
        with FileSink(path) as sink:
            sink.write("first")
            sink.write("second")
        assert path.read_text(encoding="utf-8") == "first\nsecond\n"

    def test_reopen_appends(self, tmp_path: Path) -> None:
        path = tmp_path / "out.log"
        with FileSink(path) as sink:
            sink.write("a")
        with FileSink(path) as sink:
            sink.write("b")
        assert path.read_text(encoding="utf-8").splitlines() == ["a", "b"]

    def test_double_close(self, tmp_path: Path) -> None:
        sink = FileSink(tmp_path / "out.log")
        sink.close()
        sink.close()
        sink.write("dropped")
        assert (tmp_path / "out.log").read_text(encoding="utf-8") == ""


@pytest.mark.unit
class TestBackgroundSink:
    def test_delivers_in_order_and_closes_inner(self) -> None:
        inner = RecordingSink()
        sink = BackgroundSink(inner)
        for i in range(20):
            sink.write(f"line {i}")
        sink.close()
        assert inner.texts == [f"line {i}" for i in range(20)]
        assert inner.close_calls == 1

    def test_write_does_not_wait_for_slow_inner(self) -> None:
        inner = RecordingSink(delay=0.05)
        sink = BackgroundSink(inner)
        started = time.monotonic()
        for _ in range(5):
            sink.write("slow")
        assert time.monotonic() - started < 0.2
        sink.flush()
        assert len(inner.texts) == 5
        sink.close()

    def test_inner_failure_keeps_worker_running(self) -> None:
        class Flaky(RecordingSink):
            def write(self, text: str) -> None:
                if text == "fail":
                    raise RuntimeError("flaky")
                super().write(text)

        inner = Flaky()
        sink = BackgroundSink(inner)
        sink.write("fail")
        sink.write("ok")
        sink.close()
        assert inner.texts == ["ok"]

    def test_concurrent_close(self) -> None:
        inner = RecordingSink()
        sink = BackgroundSink(inner)
        threads = [threading.Thread(target=sink.close) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert inner.close_calls == 1
