import logging
import os
import json
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone
from typing import Dict, List, Optional

# ANSI color codes
COLOR_CODES = {
    "DEBUG": "\033[36m",     # Cyan
    "INFO": "\033[32m",      # Green
    "WARNING": "\033[33m",   # Yellow
    "ERROR": "\033[31m",     # Red
    "CRITICAL": "\033[41m",  # Red background
    "RESET": "\033[0m",      # Reset
}

# Record attributes rendered as context when present
CONTEXT_FIELDS = ("host", "hostname", "path")

# ------------------ FORMATTERS ------------------


def _record_context(record, default_context: Dict[str, str], show_environment: bool) -> Dict[str, str]:
    context = {**default_context}
    for field in CONTEXT_FIELDS:
        if hasattr(record, field):
            context[field] = getattr(record, field)
    if show_environment and hasattr(record, "environment"):
        context["environment"] = record.environment
    return context


class JSONFormatter(logging.Formatter):
    """Custom formatter for structured (JSON) logs."""
    def __init__(self, default_context: Optional[Dict[str, str]] = None, show_environment: bool = True):
        super().__init__()
        self.default_context = default_context or {}
        self.show_environment = show_environment

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "logger": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
        }

        context = _record_context(record, self.default_context, self.show_environment)
        if context:
            log_record["context"] = context

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_record)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""
    def __init__(self, default_context: Optional[Dict[str, str]] = None, show_environment: bool = False, colored: bool = True):
        super().__init__(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.default_context = default_context or {}
        self.show_environment = show_environment
        self.colored = colored

    def format(self, record):
        levelname = record.levelname
        if self.colored and levelname in COLOR_CODES:
            color = COLOR_CODES[levelname]
            record.levelname = f"\u001b[1m{color}{levelname}{COLOR_CODES['RESET']}\u001b[0m"
        try:
            base = super().format(record)
        finally:
            record.levelname = levelname

        context = _record_context(record, self.default_context, self.show_environment)
        if context:
            base += " " + " ".join(f"{key}={value}" for key, value in context.items())
        return base


# ------------------ LOGGER CLASS ------------------

class EnvironmentLoggerAdapter(logging.LoggerAdapter):
    """
    A LoggerAdapter that automatically injects 'environment' into every log record.
    """
    def __init__(self, logger, environment: str):
        super().__init__(logger, {"environment": environment})

    def process(self, msg, kwargs):
        # Merge any existing extras with environment info
        extra = kwargs.get("extra", {})
        extra["environment"] = self.extra["environment"]
        kwargs["extra"] = extra
        return msg, kwargs


def _build_handlers(
    formatter: logging.Formatter,
    log_file: Optional[str],
    to_console: bool,
    max_bytes: int,
    backup_count: int,
) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count)
        )
    if to_console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


class Logger:
    """
    Configures the "vhost" logger (or ``name``) and returns it wrapped in an
    EnvironmentLoggerAdapter.

    The module loggers ``vhost.middleware.virtual_host`` and ``vhost.app``
    sit below "vhost", so configuring it covers dispatch and error logs.
    A log file rotates at ``max_bytes``, keeping ``backup_count`` files.
    """

    def __new__(
        cls,
        name: str = "vhost",
        log_file: Optional[str] = None,
        level: int = logging.INFO,
        max_bytes: int = 5_000_000,
        backup_count: int = 3,
        json_logs: bool = True,
        to_console: bool = True,
        environment: str = "production",
        default_context: Optional[Dict[str, str]] = None,
        show_environment: bool = False,
        colored_console: bool = True,
    ) -> EnvironmentLoggerAdapter:
        if json_logs:
            formatter = JSONFormatter(default_context, show_environment)
        else:
            formatter = TextFormatter(default_context, show_environment, colored_console)

        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        # re-configuring replaces the previous handlers
        logger.handlers.clear()
        for handler in _build_handlers(formatter, log_file, to_console, max_bytes, backup_count):
            logger.addHandler(handler)

        return EnvironmentLoggerAdapter(logger, environment)
