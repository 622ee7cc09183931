"""
Logging Configuration
Sets up file-based logging with separate log files for the orchestrator components
"""

import os
import logging
from pathlib import Path
from typing import Optional
from logging.handlers import RotatingFileHandler

# logs directory (override with LOG_DIR)
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).parent.parent / "logs")))

# Log file per component logger
LOG_FILES = {
    "bank_orchestrator": "orchestrator.log",
    "bank_orchestrator.ledger_client": "ledger_client.log",
    "bank_orchestrator.feed": "feed.log",
    "bank_orchestrator.transfer": "transfer.log",
}

# Log format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Max log file size (10MB)
MAX_BYTES = 10 * 1024 * 1024
BACKUP_COUNT = 5


def setup_file_logger(name: str, log_file: Path, level: int = logging.INFO, console: bool = True) -> logging.Logger:
    """
    Set up a file-based logger with rotation

    Args:
        name: Logger name
        log_file: Path to log file
        level: Logging level
        console: Also echo warnings and errors to stderr

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))

    logger.addHandler(file_handler)

    if console:
        # Console handler: only warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def setup_logging(log_dir: Optional[Path] = None) -> None:
    """
    Set up all loggers for the orchestrator

    Args:
        log_dir: Directory for the log files (defaults to LOG_DIR)
    """
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, log_level, logging.INFO)

    target = Path(log_dir) if log_dir is not None else LOG_DIR
    target.mkdir(parents=True, exist_ok=True)

    # Component loggers propagate to "bank_orchestrator", which owns the console handler
    for name, filename in LOG_FILES.items():
        setup_file_logger(name, target / filename, level, console=(name == "bank_orchestrator"))

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logging.info("Logging configured. Log files in: %s", target)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance (creates if doesn't exist)
    """
    return logging.getLogger(name)
