import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from tracelog.exceptions import ConfigurationError

DEFAULT_SERVICE_NAME = "tracelog"


class TelemetrySettings(BaseModel):
    """Where log lines go and how long a flush may block."""

    instrumentation_key: str | None = None
    service_name: str = DEFAULT_SERVICE_NAME
    # If False, traces stay local even when a key is configured
    send_to_remote: bool = True
    log_file: Path | None = None
    log_file_level: str = "INFO"
    flush_timeout_millis: int = Field(default=3000, gt=0)

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "TelemetrySettings":
        """Build settings from the environment, loading `.env` first."""
        if load_env_file:
            load_dotenv()

        values: dict[str, object] = {
            "instrumentation_key": os.environ.get("TRACELOG_INSTRUMENTATION_KEY")
            or os.environ.get("LOGFIRE_TOKEN")
            or None,
            "service_name": os.environ.get("TRACELOG_SERVICE_NAME", DEFAULT_SERVICE_NAME),
            "send_to_remote": os.environ.get("LOCAL_LOGS_ONLY", "0") != "1",
            "log_file_level": os.environ.get("LOG_LEVEL", "INFO").upper(),
        }
        if os.environ.get("LOG_FILE"):
            values["log_file"] = os.environ["LOG_FILE"]
        if os.environ.get("TRACELOG_FLUSH_TIMEOUT_MS"):
            values["flush_timeout_millis"] = os.environ["TRACELOG_FLUSH_TIMEOUT_MS"]

        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid telemetry settings: {exc}") from exc
