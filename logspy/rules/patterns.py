"""Rules matching on the rendered message text."""

import re

from logspy.models.log_entry import LogEntry


class RegexLogRule:
    """Flags entries whose message matches a regular expression anywhere."""

    def __init__(self, pattern: str | re.Pattern[str], flags: int | re.RegexFlag = 0):
        if isinstance(pattern, str):
            self.regex = re.compile(pattern, flags)
        elif flags:
            self.regex = re.compile(pattern.pattern, pattern.flags | flags)
        else:
            self.regex = pattern
        # UNICODE is implicit for str patterns
        self.flags = re.RegexFlag(self.regex.flags & ~re.UNICODE)

    @property
    def pattern(self) -> str:
        return self.regex.pattern

    def is_violated_by(self, entry: LogEntry) -> bool:
        if not entry.message or not entry.message.strip():
            return False
        return self.regex.search(entry.message) is not None

    @property
    def violation_message(self) -> str:
        return (
            f"Message matched forbidden regex pattern '{self.pattern}' "
            f"(flags={self.flags!r})."
        )


class ForbiddenSubstringRule:
    """Flags entries whose message contains a substring, ignoring case."""

    def __init__(self, substring: str):
        self.substring = substring
        self._folded = substring.casefold()

    def is_violated_by(self, entry: LogEntry) -> bool:
        if not entry.message:
            return False
        return self._folded in entry.message.casefold()

    @property
    def violation_message(self) -> str:
        return f"Message contains forbidden substring '{self.substring}'."
