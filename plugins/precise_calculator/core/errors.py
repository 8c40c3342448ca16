"""Error types raised by the calculator core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class CalculatorError(ValueError):
    """Base class for every failure the calculator reports to a caller."""

    code = "calc.error"


@dataclass(frozen=True, slots=True)
class ParseIssue:
    """A single problem found while parsing, anchored at a column."""

    column: int
    message: str

    def __str__(self) -> str:
        return f"{self.message} at column {self.column + 1}"


class ParseError(CalculatorError):
    """Raised when the input line is not a valid expression.

    All issues found in the line are collected and reported together.
    """

    code = "calc.parse_error"

    def __init__(self, issues: Sequence[ParseIssue]):
        self.issues = tuple(issues)
        super().__init__("; ".join(str(issue) for issue in self.issues) or "invalid expression")


class EvaluationError(CalculatorError):
    """Raised when a parsed expression cannot be reduced."""

    code = "calc.evaluation_error"


class DivisionByZero(EvaluationError):
    code = "calc.division_by_zero"

    def __init__(self, message: str = "division by zero"):
        super().__init__(message)


class NumericOverflow(EvaluationError):
    """Raised when a decimal result exceeds the largest representable exponent."""

    code = "calc.overflow"

    def __init__(self, message: str = "numeric overflow"):
        super().__init__(message)


class ApplyNotImplemented(EvaluationError):
    """Raised for a function application with no defined reduction."""

    code = "calc.not_implemented"


__all__ = [
    "ApplyNotImplemented",
    "CalculatorError",
    "DivisionByZero",
    "EvaluationError",
    "NumericOverflow",
    "ParseError",
    "ParseIssue",
]
