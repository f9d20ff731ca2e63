"""
Clean logging configuration - minimal console output, warnings/errors to a JSON file.
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from pythonjsonlogger import jsonlogger


def setup_logging(settings) -> logging.Logger:
    """Setup clean console + file logging."""

    log_path = Path(settings.LOG_FILE) if settings.LOG_FILE else None

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = []

    # Console handler - timestamped, like the request log lines
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
    console_handler.setLevel(getattr(logging, settings.LOG_LEVEL.upper()))
    handlers.append(console_handler)

    # File handler - warnings/errors only, one JSON object per line. Empty LOG_FILE disables it.
    if log_path is not None:
        try:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_path, maxBytes=10*1024*1024, backupCount=5, encoding="utf-8"
            )
            file_handler.setFormatter(jsonlogger.JsonFormatter(
                "%(asctime)s %(name)s %(levelname)s %(message)s",
                static_fields={"service": settings.APP_NAME, "environment": settings.ENVIRONMENT},
            ))
            file_handler.setLevel(logging.WARNING)
            handlers.append(file_handler)
        except OSError as e:
            sys.stderr.write(f"File logging disabled ({log_path}): {e}\n")

    # Configure logging
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper()), handlers=handlers, force=True)

    # Silence third-party loggers
    for lib in ["pymongo", "motor", "httpx", "urllib3"]:
        logging.getLogger(lib).setLevel(logging.WARNING)

    return logging.getLogger("feedback_api")


def get_logger(name: str) -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(name)
