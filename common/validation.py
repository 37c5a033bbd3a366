"""Request payload validation for plugin APIs."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

import pydantic
from pydantic import BaseModel


class ValidationError(ValueError):
    """Raised when a payload does not match its schema."""

    def __init__(self, message: str, *, details: Any | None = None):
        super().__init__(message)
        self.details = details


class SchemaModel(BaseModel):
    """Strict base model for request/response validation."""

    model_config = pydantic.ConfigDict(extra="forbid", str_strip_whitespace=True)


TModel = TypeVar("TModel", bound=SchemaModel)


def _describe_errors(exc: pydantic.ValidationError) -> list[dict[str, Any]]:
    return [
        {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"], "type": error["type"]}
        for error in exc.errors(include_url=False)
    ]


def parse_model(model: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    """Validate ``payload`` against ``model``, raising :class:`ValidationError` with field details."""

    if payload is not None and not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload or {})
    except pydantic.ValidationError as exc:
        raise ValidationError("Invalid request payload", details=_describe_errors(exc)) from exc


__all__ = ["SchemaModel", "ValidationError", "parse_model"]
