"""Machine-readable JSON formatter."""

import structlog

from logspy.models.log_entry import LogEntry


class JsonLogFormatter:
    """Render every entry field as one line of JSON.

    Property values that are not JSON-native are serialized with ``repr``.
    """

    def __init__(self, sort_keys: bool = False) -> None:
        self._renderer = structlog.processors.JSONRenderer(
            default=repr, sort_keys=sort_keys
        )

    def format(self, entry: LogEntry) -> str:
        return str(self._renderer(None, "format", entry.to_dict()))
