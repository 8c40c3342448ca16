"""API routes for the Precise Calculator plugin."""

from __future__ import annotations

from dataclasses import replace
from typing import Literal

from flask import Blueprint, Response, current_app, request
from pydantic import Field

from common.errors import ValidationAppError
from common.logging import get_logger
from common.responses import fail, ok
from common.validation import SchemaModel, ValidationError, parse_model

from ..core import (
    CalculatorError,
    CalculatorSettings,
    Constant,
    ExactValue,
    ParseError,
    RoundingMode,
    describe_kind,
    load_settings,
)
from ..core.settings import MAX_DISPLAY_DIGITS
from ..core.value import format_integer

logger = get_logger("precise_calculator")


class EvaluatePayload(SchemaModel):
    expression: str
    rounding: Literal["nearest", "zero", "up", "down", "away_zero"] | None = None
    display_digits: int | None = Field(default=None, ge=1, le=MAX_DISPLAY_DIGITS)


api_bp = Blueprint("precise_calculator_api", __name__, url_prefix="/api/precise_calculator")


def _settings() -> CalculatorSettings:
    plugin_settings = current_app.config.get("PLUGIN_SETTINGS", {}) or {}
    return load_settings(plugin_settings.get("precise_calculator"))


def _error_details(exc: CalculatorError) -> dict | None:
    if isinstance(exc, ParseError):
        return {"errors": [{"column": issue.column, "message": issue.message} for issue in exc.issues]}
    return None


@api_bp.post("/evaluate")
def evaluate() -> Response:
    raw_payload = request.get_json(silent=True) or {}
    try:
        payload = parse_model(EvaluatePayload, raw_payload)
    except ValidationError as exc:
        return fail(
            ValidationAppError(
                message=str(exc),
                details=getattr(exc, "details", None),
            )
        )

    settings = _settings()
    if len(payload.expression) > settings.max_expression_length:
        return fail(ValidationAppError(message="Expression is too long"))
    if payload.rounding is not None:
        settings = replace(settings, rounding=RoundingMode(payload.rounding))
    if payload.display_digits is not None:
        settings = replace(settings, display_digits=payload.display_digits)

    evaluator = settings.evaluator()
    try:
        parsed = evaluator.parse(payload.expression)
        reduced = evaluator.evaluate(parsed)
    except CalculatorError as exc:
        logger.info("rejected expression %r: %s", payload.expression, exc)
        return fail(ValidationAppError(message=str(exc), code=exc.code, details=_error_details(exc)))

    data = {
        "input": evaluator.render(parsed),
        "result": evaluator.render(reduced),
        "kind": describe_kind(reduced),
        "precision": evaluator.precision.digits,
        "rounding": evaluator.rounding.value,
    }
    if isinstance(reduced, Constant) and isinstance(reduced.value, ExactValue):
        # Strings keep arbitrarily large integers intact in JSON.
        data["numerator"] = format_integer(reduced.value.value.numerator)
        data["denominator"] = format_integer(reduced.value.value.denominator)
    return ok(data)


@api_bp.get("/functions")
def functions() -> Response:
    evaluator = _settings().evaluator()
    entries = [
        {"name": spec.name, "arity": spec.arity, "summary": spec.summary}
        for spec in sorted(evaluator.functions.values(), key=lambda item: item.name)
    ]
    return ok({"functions": entries})


blueprints = [api_bp]


__all__ = ["blueprints", "evaluate", "functions"]
