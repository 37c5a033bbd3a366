"""Logging helpers with request correlation."""

from __future__ import annotations

import logging
import os
import time
import uuid
from typing import Any

from flask import Flask, g, has_request_context, request

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"
ROOT_LOGGER = "physics_calc"


class _RequestIdFilter(logging.Filter):
    """Stamp every record with the current request id (``-`` outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = getattr(g, "request_id", "-") if has_request_context() else "-"
        return True


def _level_from_env() -> int:
    name = os.environ.get("PHYSICS_CALC_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a named logger; handlers live on the ``physics_calc`` root only."""

    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        handler.addFilter(_RequestIdFilter())
        root.addHandler(handler)
        root.setLevel(_level_from_env())
    return logging.getLogger(name)


def _request_context() -> dict[str, Any]:
    return {
        "request_id": getattr(g, "request_id", "-"),
        "path": request.path,
        "method": request.method,
    }


def install_request_logging(app: Flask) -> None:
    logger = get_logger(f"{ROOT_LOGGER}.requests")

    @app.before_request
    def _begin_request() -> None:
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
        g.request_started = time.perf_counter()

    @app.after_request
    def _after_request(response):
        duration_ms = 0.0
        if hasattr(g, "request_started"):
            duration_ms = (time.perf_counter() - g.request_started) * 1000
        context = _request_context()
        logger.info(
            "%s %s -> %s (%.2f ms)",
            context["method"],
            context["path"],
            response.status_code,
            duration_ms,
            extra={"request_id": context["request_id"]},
        )
        response.headers.setdefault("X-Request-ID", getattr(g, "request_id", ""))
        return response

    @app.teardown_request
    def _teardown_request(exc):  # pragma: no cover - flask hooks
        if exc is not None:
            logger.error("request error", exc_info=exc, extra={"request_id": getattr(g, "request_id", "-")})


__all__ = ["get_logger", "install_request_logging"]
