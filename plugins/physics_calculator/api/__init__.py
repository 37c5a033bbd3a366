"""API routes for the Physics Calculator plugin."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Mapping

from flask import Blueprint, Response, current_app, request
from pydantic import Field

from common.errors import NotFoundAppError, UnprocessableAppError, ValidationAppError
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import compute, get_session_store, normalize, widget_config
from ..core.pipeline import DEFAULT_MAX_INPUT_LENGTH
from ..core.session import DEFAULT_MAX_SESSIONS, DEFAULT_SESSION_TTL


class LatexPayload(SchemaModel):
    latex: str


class EditPayload(SchemaModel):
    latex: str
    sequence: int | None = Field(default=None, ge=1)


api_bp = Blueprint("physics_calculator_api", __name__, url_prefix="/api/physics_calculator")


def _settings() -> Mapping[str, Any]:
    return current_app.config.get("PLUGIN_SETTINGS", {}).get("physics_calculator", {}) or {}


def _max_input_length() -> int:
    try:
        return max(int(_settings().get("max_input_length", DEFAULT_MAX_INPUT_LENGTH)), 1)
    except (TypeError, ValueError):
        return DEFAULT_MAX_INPUT_LENGTH


def _session_store():
    sessions = _settings().get("sessions") or {}
    store = get_session_store()
    try:
        max_items = int(sessions.get("max_sessions", DEFAULT_MAX_SESSIONS))
    except (TypeError, ValueError):
        max_items = DEFAULT_MAX_SESSIONS
    try:
        ttl = timedelta(minutes=float(sessions["ttl_minutes"])) if "ttl_minutes" in sessions else DEFAULT_SESSION_TTL
    except (TypeError, ValueError):
        ttl = DEFAULT_SESSION_TTL
    store.configure(max_items=max_items, ttl=ttl)
    return store


def _parse(model: type[SchemaModel]) -> SchemaModel | Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        return parse_model(model, raw_payload)
    except ValidationError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                code="physics_calc.invalid_request",
                details={"errors": getattr(exc, "details", None)},
            )
        )


def _session_not_found(session_id: str) -> Response:
    return fail(
        NotFoundAppError(
            message="Session expired or not found",
            code="physics_calc.session_not_found",
            details={"session_id": session_id},
        )
    )


@api_bp.get("/config")
def config_endpoint() -> Response:
    return ok(widget_config())


@api_bp.post("/normalize")
def normalize_endpoint() -> Response:
    payload = _parse(LatexPayload)
    if isinstance(payload, Response):
        return payload
    return ok({"latex": payload.latex, "normalized": normalize(payload.latex)})


@api_bp.post("/evaluate")
def evaluate_endpoint() -> Response:
    payload = _parse(LatexPayload)
    if isinstance(payload, Response):
        return payload
    result = compute(payload.latex, max_length=_max_input_length())
    if not result.ok:
        return fail(
            UnprocessableAppError(
                message=result.error or "Evaluation failed",
                code="physics_calc.evaluation_error",
                details={"normalized": result.normalized},
            )
        )
    return ok(result.to_dict())


@api_bp.post("/sessions")
def create_session() -> Response:
    session_id, gate = _session_store().create()
    return ok({"session_id": session_id, **gate.snapshot()}, status=201)


@api_bp.get("/sessions/<session_id>")
def session_state(session_id: str) -> Response:
    try:
        gate = _session_store().get(session_id)
    except KeyError:
        return _session_not_found(session_id)
    return ok({"session_id": session_id, **gate.snapshot()})


@api_bp.delete("/sessions/<session_id>")
def delete_session(session_id: str) -> Response:
    if not _session_store().delete(session_id):
        return _session_not_found(session_id)
    return ok({"session_id": session_id, "deleted": True})


@api_bp.post("/sessions/<session_id>/edits")
def session_edit(session_id: str) -> Response:
    payload = _parse(EditPayload)
    if isinstance(payload, Response):
        return payload
    try:
        gate = _session_store().get(session_id)
    except KeyError:
        return _session_not_found(session_id)
    ticket = gate.submit(payload.sequence)
    result = compute(payload.latex, max_length=_max_input_length())
    applied = gate.complete(ticket, result)
    return ok(
        {
            "session_id": session_id,
            "sequence": ticket,
            "applied": applied,
            "result": result.to_dict(),
            **gate.snapshot(),
        }
    )


blueprints = [api_bp]


__all__ = [
    "blueprints",
    "config_endpoint",
    "create_session",
    "delete_session",
    "evaluate_endpoint",
    "normalize_endpoint",
    "session_edit",
    "session_state",
]
