"""JSON envelopes shared by every blueprint."""

from __future__ import annotations

from typing import Any

from flask import Response, g, has_request_context, jsonify

from .errors import AppError, ensure_app_error


def _meta() -> dict[str, Any]:
    if has_request_context() and getattr(g, "request_id", None):
        return {"request_id": g.request_id}
    return {}


def ok(data: Any, *, status: int = 200) -> Response:
    """Return ``{"success": true, "data": ...}``."""

    payload = {"success": True, "data": data, "meta": _meta()}
    response = jsonify(payload)
    response.status_code = status
    return response


def fail(error: AppError | Exception, *, status: int | None = None) -> Response:
    """Return ``{"success": false, "error": {...}}`` with the error's status code."""

    app_error = ensure_app_error(error)
    payload = {"success": False, "error": app_error.to_dict(), "meta": _meta()}
    response = jsonify(payload)
    response.status_code = status or app_error.status_code
    return response


__all__ = ["ok", "fail"]
