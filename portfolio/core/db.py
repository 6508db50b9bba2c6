"""Slow statement warnings for the SQLAlchemy engine.

Start times are kept on ``connection.info`` as a stack, so nested
executions on one connection are timed separately.
"""

import logging
import time
from typing import Any, Dict

from flask import g, has_request_context
from sqlalchemy import event
from sqlalchemy.engine import Engine

from portfolio.core.config import get_slow_query_threshold_ms, slow_query_alerts_enabled

logger = logging.getLogger("portfolio.sql")

_START_TIMES = "portfolio_query_start"
# Bound values of these columns never reach the log
_REDACTED_COLUMNS = ("password", "token", "secret", "email", "buyer")


def _shorten(value: Any, limit: int = 500) -> str:
    text = str(value)
    return text if len(text) <= limit else text[:limit] + "..."


def _redact(params: Any) -> Any:
    if isinstance(params, dict):
        return {
            key: "***"
            if any(column in str(key).lower() for column in _REDACTED_COLUMNS)
            else _shorten(value, 200)
            for key, value in params.items()
        }
    if isinstance(params, (list, tuple)):
        return [_redact(item) for item in params]
    return _shorten(params, 200)


def _request_fields() -> Dict[str, Any]:
    if not has_request_context():
        return {}
    user = g.get("current_user") or {}
    fields = {
        "request_id": g.get("request_id"),
        "route": g.get("route"),
        "user_id": user.get("userId"),
    }
    return {key: value for key, value in fields.items() if value is not None}


def _start_timer(conn, cursor, statement, parameters, context, executemany):
    conn.info.setdefault(_START_TIMES, []).append(time.perf_counter())


def _stop_timer(conn, cursor, statement, parameters, context, executemany):
    started = conn.info.get(_START_TIMES)
    if not started:
        return
    duration_ms = (time.perf_counter() - started.pop()) * 1000.0
    if not slow_query_alerts_enabled() or duration_ms < get_slow_query_threshold_ms():
        return

    logger.warning(
        "Slow query detected",
        extra={
            "context": {
                "duration_ms": round(duration_ms, 2),
                "statement": _shorten(statement or ""),
                "params": _redact(parameters),
                "database": conn.engine.url.database,
                **_request_fields(),
            }
        },
    )


def register_query_timing(engine: Engine) -> None:
    """Attach the timing listeners to ``engine`` once."""
    if event.contains(engine, "after_cursor_execute", _stop_timer):
        return
    event.listen(engine, "before_cursor_execute", _start_timer)
    event.listen(engine, "after_cursor_execute", _stop_timer)
