import copy
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable

# Third-party loggers that only matter at WARNING and above
QUIET_LOGGERS = ("pymongo", "motor", "minio", "urllib3", "sentry_sdk")


class JSONFormatter(logging.Formatter):
    """One JSON object per line; context passed to log_with_context lands under "context" """

    def format(self, record: logging.LogRecord) -> str:
        log_obj: Dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        context = getattr(record, "context", None)
        if context:
            log_obj["context"] = context

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_obj, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Colored formatter for console output"""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    NAME_COLOR = '\033[94m'
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # Other handlers receive the same record
        colored = copy.copy(record)
        colored.levelname = f"{self.COLORS.get(record.levelname, self.RESET)}{record.levelname}{self.RESET}"
        colored.name = f"{self.NAME_COLOR}{record.name}{self.RESET}"
        return super().format(colored)


def setup_logging(
    level: str = "INFO",
    app_name: str = "Team Drive",
    enable_json: bool = False,
    log_file: str | None = None
) -> None:
    """
    Configure the root logger for the API process

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        app_name: Name of the logger announcing the configuration
        enable_json: JSON lines on stdout instead of colored text
        log_file: Optional file path; the file always receives JSON lines
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    if enable_json:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ColoredFormatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
    root_logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    configure_loggers()

    logging.getLogger(app_name).info(f"Logging configured successfully - Level: {level}")


def configure_loggers(quiet: Iterable[str] = QUIET_LOGGERS) -> None:
    """Keep server loggers at INFO and silence chatty client libraries"""
    for name in ("uvicorn.access", "uvicorn.error", "fastapi"):
        logging.getLogger(name).setLevel(logging.INFO)

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name"""
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with key/value context

    The context is appended to the text for console readers and attached
    to the record as ``context`` for the JSON formatter.

    Args:
        logger: Logger instance
        level: Log level (debug, info, warning, error, critical)
        message: Log message
        **context: Additional context to include
    """
    numeric_level = getattr(logging, level.upper())
    if not logger.isEnabledFor(numeric_level):
        return

    if context:
        message = f"{message} - " + ", ".join(f"{k}: {v}" for k, v in context.items())

    logger.log(numeric_level, message, extra={"context": context}, stacklevel=2)
