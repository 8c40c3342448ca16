"""Exports for the precise calculator core."""

from .errors import (
    ApplyNotImplemented,
    CalculatorError,
    DivisionByZero,
    EvaluationError,
    NumericOverflow,
    ParseError,
    ParseIssue,
)
from .evaluator import EvaluationResult, Evaluator, PrecisionMode, RoundingMode
from .expr import (
    Add,
    Apply,
    Constant,
    Div,
    Expr,
    Mul,
    Neg,
    Precedence,
    Sub,
    Symbol,
    describe_kind,
    precedence_of,
)
from .functions import FunctionSpec, default_registry
from .parser import parse
from .printer import Printer, print_expr
from .settings import CalculatorSettings, load_settings
from .value import DecimalValue, ExactValue, Value, format_decimal, to_display_string

__all__ = [
    "Add",
    "Apply",
    "ApplyNotImplemented",
    "CalculatorError",
    "CalculatorSettings",
    "Constant",
    "DecimalValue",
    "Div",
    "DivisionByZero",
    "EvaluationError",
    "EvaluationResult",
    "Evaluator",
    "ExactValue",
    "Expr",
    "FunctionSpec",
    "Mul",
    "Neg",
    "NumericOverflow",
    "ParseError",
    "ParseIssue",
    "Precedence",
    "PrecisionMode",
    "Printer",
    "RoundingMode",
    "Sub",
    "Symbol",
    "Value",
    "default_registry",
    "describe_kind",
    "format_decimal",
    "load_settings",
    "parse",
    "precedence_of",
    "print_expr",
    "to_display_string",
]
