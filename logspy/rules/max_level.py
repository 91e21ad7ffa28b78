from logspy.models.levels import LogLevel
from logspy.models.log_entry import LogEntry


class MaxLogLevelRule:
    """Flags entries more severe than ``max_level``."""

    def __init__(self, max_level: LogLevel):
        self.max_level = LogLevel.parse(max_level)

    def is_violated_by(self, entry: LogEntry) -> bool:
        return entry.level > self.max_level

    @property
    def violation_message(self) -> str:
        return (
            "Log level exceeded the maximum allowed level of "
            f"'{self.max_level.name}'."
        )
