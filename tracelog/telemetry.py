"""Remote telemetry clients.

The facade talks to the backend only through `TelemetryClient`, so tests and
embedders can swap in their own sink. `LogfireTelemetryClient` is the
production binding.
"""

import threading
from typing import Any, Literal, Protocol

import logfire

from tracelog.levels import TraceLevel
from tracelog.settings import DEFAULT_SERVICE_NAME, TelemetrySettings

# The composed line travels as an attribute so braces in it are never
# interpreted as template fields.
TRACE_TEMPLATE = "{line}"


class TelemetryClient(Protocol):
    """Sink for composed lines.

    Clients may also define `shutdown(timeout_millis) -> bool`; the facade
    calls it when a client is replaced or closed.
    """

    def track_trace(
        self, message: str, level: TraceLevel, attributes: dict[str, Any] | None = None
    ) -> None: ...

    def flush(self, timeout_millis: int = 3000) -> bool: ...


class LogfireTelemetryClient:
    """Sends trace events to Logfire.

    The underlying `logfire.Logfire` instance is configured on first use and
    is local to this client, so several clients can coexist in one process.
    """

    def __init__(
        self,
        instrumentation_key: str | None = None,
        service_name: str = DEFAULT_SERVICE_NAME,
        send_to_remote: bool = True,
    ):
        self._instrumentation_key = instrumentation_key
        self._service_name = service_name
        self._send_to_remote = send_to_remote
        self._instance: logfire.Logfire | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls, settings: TelemetrySettings, instrumentation_key: str | None = None
    ) -> "LogfireTelemetryClient":
        return cls(
            instrumentation_key=instrumentation_key or settings.instrumentation_key,
            service_name=settings.service_name,
            send_to_remote=settings.send_to_remote,
        )

    @property
    def instrumentation_key(self) -> str | None:
        return self._instrumentation_key

    @property
    def send_to_logfire(self) -> bool | Literal["if-token-present"]:
        if not self._send_to_remote:
            return False
        if self._instrumentation_key:
            return True
        return "if-token-present"

    def _get_instance(self) -> logfire.Logfire:
        with self._lock:
            if self._instance is None:
                self._instance = logfire.configure(
                    local=True,
                    token=self._instrumentation_key,
                    service_name=self._service_name,
                    send_to_logfire=self.send_to_logfire,
                    console=False,
                    # Trace payload must match the console line exactly
                    scrubbing=False,
                    inspect_arguments=False,
                )
            return self._instance

    def connect(self) -> None:
        """Configure the Logfire instance now instead of on the first trace."""
        self._get_instance()

    def track_trace(
        self, message: str, level: TraceLevel, attributes: dict[str, Any] | None = None
    ) -> None:
        payload = dict(attributes or {})
        payload["line"] = message
        self._get_instance().log(level.logfire_level, TRACE_TEMPLATE, attributes=payload)

    def flush(self, timeout_millis: int = 3000) -> bool:
        """Push buffered traces to the backend, blocking up to `timeout_millis`."""
        with self._lock:
            instance = self._instance
        if instance is None:
            return True
        return bool(instance.force_flush(timeout_millis=timeout_millis))

    def shutdown(self, timeout_millis: int = 3000) -> bool:
        """Flush and stop the Logfire instance; later traces are dropped by it."""
        with self._lock:
            instance = self._instance
        if instance is None:
            return True
        return bool(instance.shutdown(timeout_millis=timeout_millis, flush=True))
