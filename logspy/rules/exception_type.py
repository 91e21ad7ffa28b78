from logspy.core.errors import ConfigurationError
from logspy.models.log_entry import LogEntry


class ExceptionTypeRule:
    """Flags entries whose exception is an instance of a forbidden type.

    Matching uses ``isinstance``, so subclasses of a forbidden type match too.
    """

    def __init__(self, *forbidden: type[BaseException]):
        for exc_type in forbidden:
            if not (isinstance(exc_type, type) and issubclass(exc_type, BaseException)):
                raise ConfigurationError(
                    f"ExceptionTypeRule expects exception classes, got {exc_type!r}",
                    setting="forbidden",
                )
        # dict keeps registration order while dropping duplicates
        self.forbidden: tuple[type[BaseException], ...] = tuple(dict.fromkeys(forbidden))

    def is_violated_by(self, entry: LogEntry) -> bool:
        if entry.exception is None or not self.forbidden:
            return False
        return isinstance(entry.exception, self.forbidden)

    @property
    def violation_message(self) -> str:
        names = ",".join(exc_type.__name__ for exc_type in self.forbidden)
        return f"An exception of forbidden type was logged: {names}"
