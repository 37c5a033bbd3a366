"""Normalise, evaluate and format a single widget edit."""

from __future__ import annotations

from dataclasses import dataclass

from common.logging import get_logger

from .evaluator import EvaluationError, evaluate
from .formatter import format_quantity
from .normalizer import normalize
from .quantity import Quantity

DEFAULT_MAX_INPUT_LENGTH = 2048

logger = get_logger("physics_calc.pipeline")


@dataclass(frozen=True, slots=True)
class ComputationResult:
    """Outcome of one pass through the pipeline.

    Exactly one of ``quantity`` or ``error`` is set. ``error`` carries the
    evaluator's message verbatim.
    """

    latex: str
    normalized: str
    quantity: Quantity | None = None
    rendered: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"latex": self.latex, "normalized": self.normalized}
        if self.quantity is not None:
            payload.update(self.quantity.to_dict())
            payload["rendered"] = self.rendered
        else:
            payload["error"] = self.error
        return payload


def compute(latex: str, *, max_length: int | None = DEFAULT_MAX_INPUT_LENGTH) -> ComputationResult:
    """Run ``latex`` through normalisation, evaluation and formatting.

    Evaluation failures are returned in the result rather than raised, so a
    caller can keep showing its previous answer.
    """

    if max_length is not None and len(latex) > max_length:
        return ComputationResult(latex=latex, normalized="", error="Expression is too long")
    normalized = normalize(latex)
    try:
        quantity = evaluate(normalized)
    except EvaluationError as exc:
        logger.debug("evaluation failed: %s", exc)
        return ComputationResult(latex=latex, normalized=normalized, error=str(exc))
    return ComputationResult(
        latex=latex,
        normalized=normalized,
        quantity=quantity,
        rendered=format_quantity(quantity),
    )


__all__ = ["ComputationResult", "DEFAULT_MAX_INPUT_LENGTH", "compute"]
