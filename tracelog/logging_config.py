import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TextIO

CONSOLE_FORMAT = "%(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

# Internal loggers of the telemetry SDK
SDK_LOGGER_NAMES = ("logfire", "opentelemetry")
# Export errors are retried by the SDK and would otherwise flood the console
NOISY_LOGGER_NAMES = ("opentelemetry.sdk.trace.export", "opentelemetry.exporter.otlp")


def build_console_logger(
    name: str,
    stream: TextIO | None = None,
    log_file: Path | None = None,
    log_file_level: str = "INFO",
) -> logging.Logger:
    """Create a standalone logger that writes each composed line as-is.

    The logger is not registered with `logging.getLogger`, so every facade
    owns its handlers and nothing propagates to the root logger.
    """
    logger = logging.Logger(name, level=logging.DEBUG)
    logger.propagate = False

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    console_handler.setLevel(logging.DEBUG)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file is not None:
        logger.addHandler(build_file_handler(log_file, log_file_level))

    return logger


def build_file_handler(log_file: Path, level: str = "INFO") -> RotatingFileHandler:
    log_file = Path(log_file)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
    )
    file_handler.setLevel(getattr(logging, level.upper(), logging.INFO))
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return file_handler


def install_diagnostics(console_logger: logging.Logger) -> None:
    """Surface telemetry SDK warnings through the console logger's handlers."""
    for name in SDK_LOGGER_NAMES:
        sdk_logger = logging.getLogger(name)
        if sdk_logger.level == logging.NOTSET:
            sdk_logger.setLevel(logging.WARNING)
        for handler in console_logger.handlers:
            if handler not in sdk_logger.handlers:
                sdk_logger.addHandler(handler)

    for name in NOISY_LOGGER_NAMES:
        logging.getLogger(name).setLevel(logging.ERROR)


def close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        for name in SDK_LOGGER_NAMES:
            logging.getLogger(name).removeHandler(handler)
        logger.removeHandler(handler)
        handler.close()
