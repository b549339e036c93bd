"""Leveled logging to the console and Logfire."""

from tracelog.call_info import CallInfo
from tracelog.exceptions import ConfigurationError, MessageFormatError, TraceLogError
from tracelog.facade import LogFacade
from tracelog.levels import TraceLevel
from tracelog.settings import TelemetrySettings
from tracelog.telemetry import LogfireTelemetryClient, TelemetryClient

__all__ = [
    "CallInfo",
    "ConfigurationError",
    "LogFacade",
    "LogfireTelemetryClient",
    "MessageFormatError",
    "TelemetryClient",
    "TelemetrySettings",
    "TraceLevel",
    "TraceLogError",
]
