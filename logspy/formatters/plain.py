"""Plain-text formatters, from one-line minimal to multi-line verbose."""

from logspy.models.log_entry import LogEntry


SEPARATOR = "-" * 50


def _head(entry: LogEntry) -> str:
    return f"[{entry.level.name}] ({entry.category}) {entry.message}"


class MinimalPlainTextLogFormatter:
    """``[LEVEL] (category) message`` plus correlation id and exception."""

    def format(self, entry: LogEntry) -> str:
        parts = [_head(entry)]

        if entry.correlation_id.strip():
            parts.append(f" [Corr={entry.correlation_id}]")

        if entry.exception is not None:
            parts.append(f"\nException: {entry.format_exception()}")

        return "".join(parts)


class PlainTextLogFormatter:
    """Single header line with thread and trace ids, then scopes and exception."""

    def format(self, entry: LogEntry) -> str:
        parts = [_head(entry)]

        if entry.correlation_id:
            parts.append(f" | CorrId: {entry.correlation_id}")

        parts.append(f" | Thread:{entry.thread_id}")

        if entry.trace_id:
            parts.append(f" | TraceId:{entry.trace_id} SpanId:{entry.span_id}")

        if entry.scopes:
            parts.append(f"\nScopes: {' => '.join(entry.scopes)}")

        if entry.exception is not None:
            parts.append(f"\nException: {entry.format_exception()}")

        return "".join(parts)


class VerbosePlainTextLogFormatter:
    """Multi-line dump of every entry field, ending with a separator line."""

    def format(self, entry: LogEntry) -> str:
        # e.g. 2025-02-23T12:34:56.789000+00:00 [INFO] (MyCategory) Payment success
        lines = [
            f"{entry.timestamp.isoformat()} [{entry.level.name}] "
            f"({entry.category}) {entry.message}"
        ]

        if entry.correlation_id.strip():
            lines.append(f"CorrId: {entry.correlation_id}")

        task_id = entry.task_id if entry.task_id is not None else "N/A"
        lines.append(f"Thread: {entry.thread_id} (TaskId: {task_id})")

        if entry.trace_id:
            lines.append(f"TraceId: {entry.trace_id}")
            lines.append(f"SpanId:  {entry.span_id}")

        if entry.scopes:
            lines.append("Scopes:")
            lines.extend(f"  => {scope}" for scope in entry.scopes)

        if entry.exception is not None:
            lines.append("Exception:")
            lines.append(entry.format_exception() or "")

        if entry.properties:
            lines.append("Properties:")
            lines.extend(f"  {key}: {value}" for key, value in entry.properties.items())

        lines.append(SEPARATOR)
        return "\n".join(lines) + "\n"
