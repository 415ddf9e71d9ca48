"""
Structured logging for the Product API.

Every entry carries the service name, environment, and the correlation id
of the request being served, plus optional metadata. Output is either one
JSON document per line or a coloured console line.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from product_api.core.config import config
from product_api.utils.correlation_id import get_correlation_id

# LogRecord attributes that are not copied into JSON output
_RESERVED_ATTRS = frozenset({
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'message', 'pathname', 'process',
    'processName', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'exc_info', 'exc_text', 'stack_info',
})


class StructuredLogger:
    """
    Logger facade adding structured fields and correlation ids to the
    standard library logger of the service.
    """

    def __init__(self, name: str = config.service_name):
        self.service_name = name
        self.environment = config.environment
        self.format = config.log_format.lower()
        self._logger = logging.getLogger(name)
        self._setup_logging()

    def _setup_logging(self):
        """Configure handlers from the service configuration"""
        level = getattr(logging, config.log_level.upper(), logging.INFO)

        self._logger.handlers.clear()
        self._logger.setLevel(level)
        self._logger.propagate = False

        if config.log_to_console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(level)
            if self.format == "json":
                console_handler.setFormatter(JSONFormatter())
            else:
                console_handler.setFormatter(ConsoleFormatter())
            self._logger.addHandler(console_handler)

        if config.log_to_file:
            log_dir = os.path.dirname(config.log_file_path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)

            file_handler = logging.FileHandler(config.log_file_path)
            file_handler.setLevel(level)
            file_handler.setFormatter(JSONFormatter())  # files are always JSON
            self._logger.addHandler(file_handler)

    def _build_log_entry(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "service": self.service_name,
            "environment": self.environment,
            "message": message,
            "correlationId": correlation_id or get_correlation_id(),
        }
        if user_id:
            entry["userId"] = user_id
        if metadata:
            entry["metadata"] = metadata
        return entry

    def _log(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ):
        entry = self._build_log_entry(level, message, correlation_id, user_id, metadata)
        levelno = getattr(logging, level)

        if self.format == "json":
            self._logger.log(levelno, json.dumps(entry, default=str), exc_info=exc_info)
        else:
            extra = {k: v for k, v in entry.items() if k != "message"}
            self._logger.log(levelno, message, extra=extra, exc_info=exc_info)

    @staticmethod
    def _with_error(metadata: Optional[Dict[str, Any]], error: Optional[Union[str, Exception]]):
        metadata = dict(metadata or {})
        if isinstance(error, Exception):
            metadata["error"] = {"type": type(error).__name__, "message": str(error)}
        elif error:
            metadata["error"] = {"message": str(error)}
        return metadata

    def debug(self, message: str, correlation_id: Optional[str] = None,
              user_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        self._log("DEBUG", message, correlation_id, user_id, metadata)

    def info(self, message: str, correlation_id: Optional[str] = None,
             user_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        self._log("INFO", message, correlation_id, user_id, metadata)

    def warning(self, message: str, correlation_id: Optional[str] = None,
                user_id: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None):
        self._log("WARNING", message, correlation_id, user_id, metadata)

    def error(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: bool = False,
    ):
        """Error level logging; `error` is folded into the metadata"""
        metadata = self._with_error(metadata, error)
        self._log("ERROR", message, correlation_id, user_id, metadata, exc_info=exc_info)

    def critical(
        self,
        message: str,
        correlation_id: Optional[str] = None,
        user_id: Optional[str] = None,
        error: Optional[Union[str, Exception]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        metadata = self._with_error(metadata, error)
        self._log("CRITICAL", message, correlation_id, user_id, metadata, exc_info=True)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        message = record.getMessage()
        try:
            # Entries produced by StructuredLogger in json mode are already documents
            log_data = json.loads(message)
            if not isinstance(log_data, dict):
                raise ValueError
        except ValueError:
            log_data = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "level": record.levelname,
                "message": message,
            }
            for key, value in record.__dict__.items():
                if key not in _RESERVED_ATTRS:
                    log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for development"""

    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'
    }

    def format(self, record):
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S')

        line = f"{color}[{timestamp}] {record.levelname}{reset} - {record.getMessage()}"

        correlation_id = getattr(record, "correlationId", None)
        if correlation_id:
            line += f" [cid={correlation_id}]"
        user_id = getattr(record, "userId", None)
        if user_id:
            line += f" [user={user_id}]"
        metadata = getattr(record, "metadata", None)
        if metadata:
            line += f" {json.dumps(metadata, default=str)}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


logger = StructuredLogger()
