import functools
from pathlib import Path

import dotenv
import pytest

from tracelog import ConfigurationError, TelemetrySettings


def test_defaults():
    settings = TelemetrySettings.from_env(load_env_file=False)

    assert settings.instrumentation_key is None
    assert settings.service_name == "tracelog"
    assert settings.send_to_remote is True
    assert settings.log_file is None
    assert settings.flush_timeout_millis == 3000


def test_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("TRACELOG_INSTRUMENTATION_KEY", "key-1")
    monkeypatch.setenv("LOGFIRE_TOKEN", "ignored")
    monkeypatch.setenv("TRACELOG_SERVICE_NAME", "preconfigurator")
    monkeypatch.setenv("LOCAL_LOGS_ONLY", "1")
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("TRACELOG_FLUSH_TIMEOUT_MS", "250")

    settings = TelemetrySettings.from_env(load_env_file=False)

    assert settings.instrumentation_key == "key-1"
    assert settings.service_name == "preconfigurator"
    assert settings.send_to_remote is False
    assert settings.log_file == Path(tmp_path / "app.log")
    assert settings.log_file_level == "DEBUG"
    assert settings.flush_timeout_millis == 250


def test_falls_back_to_logfire_token(monkeypatch):
    monkeypatch.setenv("LOGFIRE_TOKEN", "token-2")

    assert TelemetrySettings.from_env(load_env_file=False).instrumentation_key == "token-2"


def test_loads_dotenv_file(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("TRACELOG_SERVICE_NAME=from-dotenv\n", encoding="utf-8")
    # Restore the variable to unset once the test finishes
    monkeypatch.setenv("TRACELOG_SERVICE_NAME", "unset")
    monkeypatch.delenv("TRACELOG_SERVICE_NAME")
    monkeypatch.setattr("tracelog.settings.load_dotenv", functools.partial(dotenv.load_dotenv, env_file))

    assert TelemetrySettings.from_env().service_name == "from-dotenv"


@pytest.mark.parametrize("value", ["0", "-5", "soon"])
def test_invalid_flush_timeout(monkeypatch, value):
    monkeypatch.setenv("TRACELOG_FLUSH_TIMEOUT_MS", value)

    with pytest.raises(ConfigurationError):
        TelemetrySettings.from_env(load_env_file=False)
