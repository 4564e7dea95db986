"""
Logger utility for tollgate.

Console output goes to stderr (warnings and errors only). When
TOLLGATE_LOG_DIR is set, rotating file logs are written there too:
- tollgate.log: Main log with 5MB rotation, keeps 3 backups
- tollgate.errors.log: Errors only, 2MB rotation, keeps 2 backups
- tollgate.json: Structured JSON (TOLLGATE_LOG_JSON), 5MB rotation, keeps 2 backups
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from tollgate.config import get_settings


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def _get_log_dir() -> Optional[Path]:
    """Get log directory from settings, creating it if needed."""
    log_dir = get_settings().log_dir
    if log_dir is None:
        return None
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def get_logger(name: str = "tollgate", level: Optional[int] = None) -> logging.Logger:
    """
    Get or create a logger with console and rotating file handlers.

    Handlers are attached once per logger name. Child loggers created
    with logging.getLogger(__name__) inside the package propagate here
    when name is "tollgate".

    Args:
        name: Logger name
        level: Optional logging level (defaults to TOLLGATE_LOG_LEVEL)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    settings = get_settings()

    if not logger.handlers:
        text_formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        # Console handler (stderr) - minimal output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(text_formatter)
        logger.addHandler(console_handler)

        log_dir = _get_log_dir()
        if log_dir is not None:
            main_handler = RotatingFileHandler(
                log_dir / "tollgate.log",
                maxBytes=5 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
            main_handler.setLevel(logging.DEBUG)
            main_handler.setFormatter(text_formatter)
            logger.addHandler(main_handler)

            error_handler = RotatingFileHandler(
                log_dir / "tollgate.errors.log",
                maxBytes=2 * 1024 * 1024,
                backupCount=2,
                encoding="utf-8",
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(text_formatter)
            logger.addHandler(error_handler)

            if settings.log_json:
                json_handler = RotatingFileHandler(
                    log_dir / "tollgate.json",
                    maxBytes=5 * 1024 * 1024,
                    backupCount=2,
                    encoding="utf-8",
                )
                json_handler.setLevel(logging.INFO)
                json_handler.setFormatter(JsonFormatter())
                logger.addHandler(json_handler)

    if level is not None:
        logger.setLevel(level)
    else:
        logger.setLevel(settings.log_level.upper())

    return logger
