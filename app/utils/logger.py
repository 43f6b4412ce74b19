"""
Structured text logging for the prompt enhancer service.

Log lines look like:
    2025-01-01 12:00:00.000 | INFO     | app.suggestions | Suggestions generated | count=3 tier=free
"""
import logging
import sys
from typing import Dict
from app.config import settings

# Attributes every LogRecord carries; anything else came in through `extra`
_RECORD_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName",
})


class StructuredFormatter(logging.Formatter):
    """Formats records as pipe-separated text followed by key=value context."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S.%f")[:-3]
        line = f"{timestamp} | {record.levelname:8} | {record.name} | {record.getMessage()}"

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS
        }
        if context:
            line += " | " + " ".join(f"{k}={v}" for k, v in context.items())

        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)

        return line


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def setup_logging() -> logging.Logger:
    """
    Configure the `app` logger hierarchy and third-party log levels.

    Per-library levels come from APP_LOG_LEVEL, SQLALCHEMY_LOG_LEVEL,
    UVICORN_LOG_LEVEL, HTTPX_LOG_LEVEL and ASYNCPG_LOG_LEVEL.

    Returns:
        Configured root application logger
    """
    app_log_level = (settings.APP_LOG_LEVEL or settings.LOG_LEVEL).upper()

    logger = logging.getLogger("app")
    logger.setLevel(_level(app_log_level))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_level(app_log_level))
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    levels = _configure_third_party_loggers()
    logger.debug(
        "Logging configured",
        extra={"app_level": app_log_level, **levels}
    )

    return logger


def _configure_third_party_loggers() -> Dict[str, str]:
    """
    Apply configured levels to library loggers.

    Returns:
        Mapping of setting name to applied level
    """
    targets = {
        "sqlalchemy_level": (settings.SQLALCHEMY_LOG_LEVEL or "WARNING", ["sqlalchemy.engine", "sqlalchemy.pool"]),
        "uvicorn_level": (settings.UVICORN_LOG_LEVEL or "INFO", ["uvicorn", "uvicorn.access"]),
        "httpx_level": (settings.HTTPX_LOG_LEVEL or "WARNING", ["httpx"]),
        "asyncpg_level": (settings.ASYNCPG_LOG_LEVEL or "WARNING", ["asyncpg"]),
    }

    applied = {}
    for key, (level, logger_names) in targets.items():
        for logger_name in logger_names:
            logging.getLogger(logger_name).setLevel(_level(level))
        applied[key] = level.upper()

    return applied


class StructuredLogger:
    """Logger wrapper that turns keyword arguments into structured context."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, *args, **kwargs):
        exc_info = kwargs.pop("exc_info", False)

        # LogRecord attribute names cannot be passed through `extra`
        extra = {
            (f"ctx_{key}" if key in _RECORD_ATTRS else key): value
            for key, value in kwargs.items()
        }

        self._logger.log(level, msg, *args, extra=extra, exc_info=exc_info, stacklevel=3)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs):
        self._log(logging.CRITICAL, msg, *args, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger under the `app.` namespace.

    Args:
        name: Logger name suffix

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(f"app.{name}"))


# Initialize application logger
app_logger = setup_logging()
