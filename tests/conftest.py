import io
import time
from typing import Any

import pytest

from tracelog.facade import LogFacade
from tracelog.levels import TraceLevel
from tracelog.settings import TelemetrySettings

ENV_VARS = (
    "TRACELOG_INSTRUMENTATION_KEY",
    "LOGFIRE_TOKEN",
    "TRACELOG_SERVICE_NAME",
    "LOCAL_LOGS_ONLY",
    "LOG_FILE",
    "LOG_LEVEL",
    "TRACELOG_FLUSH_TIMEOUT_MS",
)


class RecordingTelemetryClient:
    """In-memory telemetry client that remembers every call."""

    def __init__(self, name: str = "recording"):
        self.name = name
        self.traces: list[tuple[str, TraceLevel, dict[str, Any]]] = []
        self.flush_timeouts: list[int] = []
        self.shutdown_timeouts: list[int] = []
        self.pending = 0

    def track_trace(self, message, level, attributes=None):
        self.traces.append((message, level, dict(attributes or {})))
        self.pending += 1

    def flush(self, timeout_millis=3000):
        self.flush_timeouts.append(timeout_millis)
        self.pending = 0
        return True

    def shutdown(self, timeout_millis=3000):
        self.shutdown_timeouts.append(timeout_millis)
        return True

    @property
    def lines(self) -> list[str]:
        return [message for message, _, _ in self.traces]


class FakeLogfire:
    """Stands in for a configured `logfire.Logfire` instance."""

    def __init__(self, **options: Any):
        self.options = options
        self.records: list[tuple[str, str, dict[str, Any]]] = []
        self.flush_calls: list[int] = []
        self.shutdown_calls: list[int] = []

    def log(self, level, msg_template, attributes=None, **kwargs):
        self.records.append((level, msg_template, dict(attributes or {})))

    def force_flush(self, timeout_millis=3000):
        self.flush_calls.append(timeout_millis)
        return True

    def shutdown(self, timeout_millis=30000, flush=True):
        self.shutdown_calls.append(timeout_millis)
        return True


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_logfire(monkeypatch):
    """Patch `logfire.configure` and collect the instances it hands out."""
    instances: list[FakeLogfire] = []

    def configure(**options):
        # Widen the window in which concurrent first calls could race
        time.sleep(0.01)
        instance = FakeLogfire(**options)
        instances.append(instance)
        return instance

    monkeypatch.setattr("tracelog.telemetry.logfire.configure", configure)
    return instances


@pytest.fixture
def console():
    return io.StringIO()


@pytest.fixture
def client():
    return RecordingTelemetryClient()


@pytest.fixture
def settings():
    return TelemetrySettings(service_name="tracelog-tests", flush_timeout_millis=1500)


@pytest.fixture
def facade(settings, console, client):
    facade = LogFacade(settings, console=console, client=client)
    yield facade
    facade.close()
