"""Configuration helpers for the calculator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .evaluator import Evaluator, PrecisionMode, RoundingMode
from .value import DEFAULT_DISPLAY_DIGITS

MAX_DISPLAY_DIGITS = 50
DEFAULT_MAX_EXPRESSION_LENGTH = 1024


@dataclass(frozen=True)
class CalculatorSettings:
    precision: PrecisionMode = PrecisionMode.DECENT
    rounding: RoundingMode = RoundingMode.NEAREST
    display_digits: int = DEFAULT_DISPLAY_DIGITS
    max_expression_length: int = DEFAULT_MAX_EXPRESSION_LENGTH

    def evaluator(self) -> Evaluator:
        return Evaluator(
            precision=self.precision,
            rounding=self.rounding,
            display_digits=self.display_digits,
        )


def _enum_value(enum_type, raw: object, default):
    try:
        return enum_type(str(raw).strip().lower())
    except ValueError:
        return default


def _int_value(raw: object, default: int, *, lower: int, upper: int | None = None) -> int:
    try:
        value = int(float(raw))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    value = max(value, lower)
    if upper is not None:
        value = min(value, upper)
    return value


def load_settings(raw: Mapping[str, object] | None) -> CalculatorSettings:
    """Build settings from the ``plugins.precise_calculator`` config section.

    Missing or unusable entries fall back to the defaults.
    """

    raw = raw or {}
    return CalculatorSettings(
        precision=_enum_value(PrecisionMode, raw.get("precision", "decent"), PrecisionMode.DECENT),
        rounding=_enum_value(RoundingMode, raw.get("rounding", "nearest"), RoundingMode.NEAREST),
        display_digits=_int_value(
            raw.get("display_digits", DEFAULT_DISPLAY_DIGITS),
            DEFAULT_DISPLAY_DIGITS,
            lower=1,
            upper=MAX_DISPLAY_DIGITS,
        ),
        max_expression_length=_int_value(
            raw.get("max_expression_length", DEFAULT_MAX_EXPRESSION_LENGTH),
            DEFAULT_MAX_EXPRESSION_LENGTH,
            lower=1,
        ),
    )


__all__ = [
    "CalculatorSettings",
    "DEFAULT_MAX_EXPRESSION_LENGTH",
    "MAX_DISPLAY_DIGITS",
    "load_settings",
]
