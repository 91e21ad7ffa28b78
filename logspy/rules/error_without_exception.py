from logspy.models.levels import LogLevel
from logspy.models.log_entry import LogEntry


class ErrorWithoutExceptionRule:
    """Flags entries at or above ``min_level`` that carry no exception."""

    def __init__(self, min_level: LogLevel = LogLevel.ERROR):
        self.min_level = LogLevel.parse(min_level)

    def is_violated_by(self, entry: LogEntry) -> bool:
        if entry.level < self.min_level:
            return False
        return entry.exception is None

    @property
    def violation_message(self) -> str:
        return (
            "Error-level log without an attached exception "
            f"(level >= {self.min_level.name})."
        )
