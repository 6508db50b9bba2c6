"""
Logging setup for the portfolio API.

Every record carries the id of the request it was emitted in, taken from the
``X-Request-ID`` header or generated. Structured fields are passed with
``extra={"context": {...}}`` and rendered as JSON in production:

    logger = logging.getLogger(__name__)
    logger.info("Domain created", extra={"context": {"domain_id": 12}})

Set ``LOG_TO_FILE=1`` to also write rotating JSON files under ``LOG_DIR``.
"""

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from flask import Flask, g, has_request_context, request

_MAX_LOG_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5


class RequestContextFilter(logging.Filter):
    """Stamp records with the current request id ("-" outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        request_id = "-"
        if has_request_context():
            request_id = g.get("request_id") or "-"
        record.request_id = request_id
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain text for development; structured fields appended as JSON."""

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "request_id"):
            record.request_id = "-"
        message = super().format(record)
        context = getattr(record, "context", None)
        if context:
            message = f"{message} {json.dumps(context, default=str)}"
        return message


def _resolve_level(log_level: Union[int, str]) -> int:
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def _file_handlers(log_dir: Path, level: int) -> List[logging.Handler]:
    log_dir.mkdir(parents=True, exist_ok=True)
    handlers: List[logging.Handler] = []
    for filename, handler_level in (
        ("portfolio.log", level),
        ("portfolio_errors.log", logging.ERROR),
    ):
        handler = logging.handlers.RotatingFileHandler(
            log_dir / filename,
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setLevel(handler_level)
        handler.setFormatter(JSONFormatter())
        handlers.append(handler)
    return handlers


def register_request_logging(app: Flask) -> None:
    """Log one line per request and one per response with its duration."""
    request_logger = logging.getLogger("portfolio.http")

    @app.before_request
    def start_request_log():
        g.request_started = time.perf_counter()
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        g.route = request.url_rule.rule if request.url_rule else request.path
        request_logger.debug(
            f"--> {request.method} {request.path}",
            extra={"context": {"route": g.route, "remote_addr": request.remote_addr}},
        )

    @app.after_request
    def finish_request_log(response):
        started = g.get("request_started")
        if started is None:
            return response
        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        user = g.get("current_user") or {}
        request_logger.info(
            f"<-- {request.method} {request.path} {response.status_code}",
            extra={
                "context": {
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                    "user_id": user.get("userId"),
                }
            },
        )
        response.headers["X-Request-ID"] = g.request_id
        return response


def setup_logging(
    app: Optional[Flask] = None,
    log_level: Union[int, str] = "INFO",
    log_to_file: Optional[bool] = None,
    use_json_format: bool = False,
) -> None:
    """
    Configure the root logger and, when ``app`` is given, request logging.

    Args:
        app: Flask application whose requests should be logged
        log_level: Level name or number
        log_to_file: Also write rotating files; defaults to ``LOG_TO_FILE``
        use_json_format: Emit JSON on stdout instead of plain text
    """
    level = _resolve_level(log_level)
    if log_to_file is None:
        log_to_file = os.getenv("LOG_TO_FILE", "0").strip().lower() in ("true", "1", "yes")

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(JSONFormatter() if use_json_format else ConsoleFormatter())
    handlers: List[logging.Handler] = [stdout_handler]

    file_error: Optional[OSError] = None
    if log_to_file:
        try:
            handlers.extend(_file_handlers(Path(os.getenv("LOG_DIR", "logs")), level))
        except OSError as exc:
            file_error = exc

    request_filter = RequestContextFilter()
    for handler in handlers:
        handler.addFilter(request_filter)
        root_logger.addHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)

    if file_error is not None:
        root_logger.warning(
            "File logging disabled, writing to stdout only",
            extra={"context": {"error": str(file_error)}},
        )

    if app is not None:
        register_request_logging(app)

    logging.getLogger("portfolio").debug(
        "Logging configured",
        extra={
            "context": {
                "level": logging.getLevelName(level),
                "log_to_file": bool(log_to_file) and file_error is None,
                "json": use_json_format,
            }
        },
    )
