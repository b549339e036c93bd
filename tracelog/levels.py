import logging
from enum import IntEnum


class TraceLevel(IntEnum):
    """Severity label attached to every composed line, ordered by severity."""

    Verbose = 1
    Info = 2
    Warning = 3
    Error = 4

    def __str__(self) -> str:
        return self.name

    def __format__(self, format_spec: str) -> str:
        return format(self.name, format_spec)

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]

    @property
    def logfire_level(self) -> str:
        return _LOGFIRE_LEVELS[self]


_LOGGING_LEVELS = {
    TraceLevel.Verbose: logging.DEBUG,
    TraceLevel.Info: logging.INFO,
    TraceLevel.Warning: logging.WARNING,
    TraceLevel.Error: logging.ERROR,
}

_LOGFIRE_LEVELS = {
    TraceLevel.Verbose: "trace",
    TraceLevel.Info: "info",
    TraceLevel.Warning: "warn",
    TraceLevel.Error: "error",
}
