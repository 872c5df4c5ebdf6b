"""
Logging setup: one stdout handler on the root logger, JSON or plain text.

JSON records carry the service name, level and source location so they can be
shipped as-is; plain text is for local runs. `log_requests` is the HTTP
middleware that writes one access record per request.
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from pythonjsonlogger import jsonlogger

JSON_FORMAT = '%(timestamp)s %(level)s %(logger)s %(message)s'
TEXT_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'

# Third-party loggers that are too chatty at the application's level
QUIET_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "passlib": logging.ERROR,
    "uvicorn.access": logging.WARNING,
}

request_logger = logging.getLogger("jobly.requests")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter stamping every record with service, level and origin."""

    def __init__(self, *args, service: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_record.update(
            timestamp=stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            level=record.levelname,
            logger=record.name,
            origin=f"{record.module}.{record.funcName}",
        )
        if self.service:
            log_record["service"] = self.service
        if record.levelno >= logging.WARNING:
            log_record["line"] = record.lineno
            log_record["pathname"] = record.pathname


def build_formatter(json_logs: bool, service: Optional[str] = None) -> logging.Formatter:
    if json_logs:
        return CustomJsonFormatter(JSON_FORMAT, service=service)
    return logging.Formatter(TEXT_FORMAT, datefmt="%H:%M:%S")


def setup_logging(log_level: str = "INFO", json_logs: bool = True, service: Optional[str] = None) -> None:
    """
    Route all logging through a single stdout handler.

    Calling it again replaces the handler rather than adding a second one.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_formatter(json_logs, service))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(log_level.upper())

    for name, level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(level)


async def log_requests(request: Request, call_next):
    """Access log: method, path, status and duration of every request."""
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        request_logger.info(
            f"{request.method} {request.url.path} {status_code}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status_code,
                "duration_ms": duration_ms,
            },
        )
