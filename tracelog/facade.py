"""Leveled logging facade.

    from tracelog import CallInfo, LogFacade

    logger = LogFacade()
    logger.configure("my-logfire-write-token")
    logger.info("Startup", "Loaded {0} rules", 5)
    logger.error(CallInfo.site(), exc, "While loading {0}", path)
    logger.flush()

Every call writes one line to the console and forwards the same line to the
telemetry client. The console write always happens first, so a line missing
from the backend is still visible locally.
"""

import itertools
import os
from collections.abc import Callable
from typing import Any, TextIO

from tracelog import logging_config
from tracelog.exceptions import ConfigurationError
from tracelog.formatting import (
    compose_line,
    custom_exception_message,
    exception_message,
    is_fault,
    render_message,
)
from tracelog.levels import TraceLevel
from tracelog.settings import TelemetrySettings
from tracelog.telemetry import LogfireTelemetryClient, TelemetryClient

# Read by the Logfire SDK when no token is passed explicitly
ACTIVE_KEY_ENV = "LOGFIRE_TOKEN"

ClientFactory = Callable[[str, TelemetrySettings], TelemetryClient]

_facade_ids = itertools.count(1)


def logfire_client_factory(instrumentation_key: str, settings: TelemetrySettings) -> TelemetryClient:
    client = LogfireTelemetryClient.from_settings(settings, instrumentation_key)
    client.connect()
    return client


class LogFacade:
    """Writes composed log lines to the console and a telemetry client."""

    def __init__(
        self,
        settings: TelemetrySettings | None = None,
        *,
        console: TextIO | None = None,
        client: TelemetryClient | None = None,
        client_factory: ClientFactory = logfire_client_factory,
    ):
        self.settings = settings if settings is not None else TelemetrySettings()
        self._client_factory = client_factory
        self._configured = False
        self._console = logging_config.build_console_logger(
            f"tracelog.console.{next(_facade_ids)}",
            stream=console,
            log_file=self.settings.log_file,
            log_file_level=self.settings.log_file_level,
        )
        # Unconfigured default: usable immediately, sends only if a token
        # is already present in the environment.
        self._client: TelemetryClient = (
            client
            if client is not None
            else LogfireTelemetryClient(
                service_name=self.settings.service_name,
                send_to_remote=self.settings.send_to_remote,
            )
        )

    @property
    def configured(self) -> bool:
        return self._configured

    @property
    def client(self) -> TelemetryClient:
        return self._client

    def configure(self, instrumentation_key: str | None = None) -> None:
        """Bind the facade to a telemetry backend.

        Intended to run once at startup, before concurrent logging begins.
        Errors raised by the telemetry SDK are not caught.

        Args:
            instrumentation_key: Backend write key. Defaults to the key from
                the facade's settings.

        Raises:
            ConfigurationError: If no usable key is available.
        """
        key = instrumentation_key if instrumentation_key is not None else self.settings.instrumentation_key
        if key is None or not key.strip():
            raise ConfigurationError("An instrumentation key is required to configure telemetry")

        client = self._client_factory(key, self.settings)
        logging_config.install_diagnostics(self._console)

        previous = self._client
        previous.flush(self.settings.flush_timeout_millis)
        self._client = client
        self._configured = True
        os.environ[ACTIVE_KEY_ENV] = key
        self._shutdown_client(previous)

    def log(self, level: TraceLevel, call_info: Any, message_format: str, *arguments: Any) -> None:
        self._emit(level, call_info, render_message(message_format, arguments))

    def verbose(self, call_info: Any, message_format: str, *arguments: Any) -> None:
        self.log(TraceLevel.Verbose, call_info, message_format, *arguments)

    def info(self, call_info: Any, message_format: str, *arguments: Any) -> None:
        self.log(TraceLevel.Info, call_info, message_format, *arguments)

    def warning(self, call_info: Any, message_format: str, *arguments: Any) -> None:
        self.log(TraceLevel.Warning, call_info, message_format, *arguments)

    warn = warning

    def error(self, call_info: Any, message: Any, *arguments: Any) -> None:
        """Log at error level.

        `message` is either a format string, or a fault (an exception or an
        object with a `diagnostic()` method). With a fault, an optional custom
        format string and its arguments may follow:

            error(call_info, "Failed after {0} tries", 3)
            error(call_info, exc)
            error(call_info, exc, "Failed after {0} tries", 3)
        """
        if not is_fault(message):
            self.log(TraceLevel.Error, call_info, message, *arguments)
        elif not arguments:
            self._emit(TraceLevel.Error, call_info, exception_message(message))
        else:
            custom_format, *custom_arguments = arguments
            self._emit(
                TraceLevel.Error,
                call_info,
                custom_exception_message(message, custom_format, custom_arguments),
            )

    def flush(self) -> bool:
        """Block until the telemetry client has pushed its buffered traces."""
        return self._client.flush(self.settings.flush_timeout_millis)

    def close(self) -> None:
        """Flush and shut down telemetry, then release console and file handlers."""
        self.flush()
        self._shutdown_client(self._client)
        logging_config.close_handlers(self._console)

    def _shutdown_client(self, client: TelemetryClient) -> None:
        shutdown = getattr(client, "shutdown", None)
        if shutdown is not None:
            shutdown(self.settings.flush_timeout_millis)

    def _emit(self, level: TraceLevel, call_info: Any, message: str) -> None:
        line = compose_line(call_info, level, message)
        self._console.log(level.logging_level, line)
        self._client.track_trace(
            line,
            level,
            attributes={"call_info": str(call_info), "trace_level": str(level)},
        )
