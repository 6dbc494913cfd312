"""JSON structured event logging.

One log line per event with timestamp, component, event and status.
Expression text is never logged raw: only its length and a short hash.
"""

from __future__ import annotations

import hashlib
import json
import logging
import time
import traceback
from datetime import datetime, timezone
from typing import Any


def elapsed_ms(start_time: float) -> float:
    return (time.monotonic() - start_time) * 1000


def describe_text(text: str) -> dict[str, Any]:
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()[:12]
    return {"len": len(text), "hash": digest}


def log_event(
    logger: logging.Logger,
    *,
    component: str,
    event: str,
    status: str = "ok",
    duration_ms: float | None = None,
    **fields: Any,
) -> None:
    payload: dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "component": component,
        "event": event,
        "status": status,
    }
    if duration_ms is not None:
        payload["duration_ms"] = round(duration_ms, 2)
    if fields:
        payload.update(fields)
    message = json.dumps(payload, ensure_ascii=False, default=str)
    if status == "error":
        logger.error(message)
    elif status == "refused":
        logger.warning(message)
    else:
        logger.info(message)


def log_error(
    logger: logging.Logger,
    *,
    component: str,
    where: str,
    exc: Exception,
    extra: dict[str, Any] | None = None,
) -> None:
    payload: dict[str, Any] = {
        "where": where,
        "exc_type": type(exc).__name__,
        "exc_msg": str(exc),
        "stack": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }
    if extra:
        payload.update(extra)
    log_event(logger, component=component, event="error", status="error", **payload)
