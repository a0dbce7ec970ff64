"""
Logging Module.

Provides the application logger and the per-job polling log.

The application logger accepts dict messages, e.g.
``logger.info({"message": "Cycle finished", "repository": "owner/repo"})``,
and renders them as JSON lines. The polling log is a plain text audit trail
of why a build did or did not start for one monitored job.
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON with standard fields (timestamp, level, logger)
    merged with the fields of a dict message. Plain string messages are stored
    under ``message``.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
        }

        if isinstance(record.msg, dict):
            log_data.update(record.msg)
        else:
            log_data["message"] = record.getMessage()

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Human readable formatter used in development mode."""

    def format(self, record: logging.LogRecord) -> str:
        if isinstance(record.msg, dict):
            fields = dict(record.msg)
            message = fields.pop("message", "")
            details = " ".join(f"{key}={value}" for key, value in fields.items())
            record = logging.makeLogRecord(
                {**record.__dict__, "msg": f"{message} {details}".strip(), "args": None}
            )
        return super().format(record)


class LogManager:
    """
    Builds and owns the application logger.

    Attributes:
        logger (logging.Logger): Configured application logger.
    """

    def __init__(
        self,
        app_name: str,
        log_dir: str = "logs",
        development: bool = False,
        level: int = logging.DEBUG,
        max_bytes: int = 10 * 1024 * 1024,
        backup_count: int = 5,
    ):
        """Initialize the logger.

        Args:
            app_name (str): Logger name, also used for the log file name.
            log_dir (str): Directory for the rotating log file.
            development (bool): Use a human readable console format.
            level (int): Logging level.
            max_bytes (int): Maximum size of one log file.
            backup_count (int): Number of rotated files to keep.
        """
        self.logger = logging.getLogger(app_name)
        self.logger.setLevel(level)
        self.logger.propagate = False

        if self.logger.handlers:
            return

        console_handler = logging.StreamHandler()
        if development:
            console_handler.setFormatter(
                ConsoleFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        else:
            console_handler.setFormatter(JSONFormatter())
        self.logger.addHandler(console_handler)

        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, f"{app_name}.log"),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(JSONFormatter())
        self.logger.addHandler(file_handler)


def get_polling_logger(job_name: str, log_file: str) -> logging.Logger:
    """Create the plain text polling log for one job.

    Args:
        job_name (str): Name of the monitored job.
        log_file (str): Path of the polling log file.

    Returns:
        logging.Logger: Logger writing one line per matcher decision.
    """
    polling_logger = logging.getLogger(f"polling.{job_name}")
    polling_logger.setLevel(logging.DEBUG)
    polling_logger.propagate = False

    if not polling_logger.handlers:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
        polling_logger.addHandler(handler)

    return polling_logger
