"""Exception classes raised by the logging facade."""


class TraceLogError(Exception):
    """Base exception for the tracelog package."""
    pass


class ConfigurationError(TraceLogError):
    """Raised when telemetry settings are missing or invalid."""
    pass


class MessageFormatError(TraceLogError, ValueError):
    """Raised when a message format does not match its arguments."""
    def __init__(self, message: str, message_format: str):
        super().__init__(message)
        self.message_format = message_format
