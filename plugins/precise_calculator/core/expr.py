"""Immutable expression tree consumed by the evaluator and the printer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from fractions import Fraction
from typing import ClassVar, Union

from .value import DecimalValue, ExactValue, Value


class Precedence(IntEnum):
    """Binding strength used to decide where parentheses are needed."""

    NO_PRECEDENCE = 0
    SUM = 1
    PRODUCT = 2
    NEG = 3
    FUNCTION_OR_FACTORIAL = 4
    # Symbols and plain numbers never need parentheses.
    ATOM = 5


@dataclass(frozen=True, slots=True)
class Constant:
    value: Value

    @classmethod
    def exact(cls, numerator: int, denominator: int = 1) -> "Constant":
        return cls(ExactValue(Fraction(numerator, denominator)))


@dataclass(frozen=True, slots=True)
class Symbol:
    """An identifier with no binding."""

    name: str


@dataclass(frozen=True, slots=True)
class BinaryOp:
    left: "Expr"
    right: "Expr"

    symbol: ClassVar[str] = "?"
    precedence: ClassVar[Precedence] = Precedence.NO_PRECEDENCE
    # Right operands of non-associative operators need a tighter context.
    right_binds_tighter: ClassVar[bool] = False


@dataclass(frozen=True, slots=True)
class Add(BinaryOp):
    symbol: ClassVar[str] = "+"
    precedence: ClassVar[Precedence] = Precedence.SUM


@dataclass(frozen=True, slots=True)
class Sub(BinaryOp):
    symbol: ClassVar[str] = "-"
    precedence: ClassVar[Precedence] = Precedence.SUM
    right_binds_tighter: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Mul(BinaryOp):
    symbol: ClassVar[str] = "*"
    precedence: ClassVar[Precedence] = Precedence.PRODUCT


@dataclass(frozen=True, slots=True)
class Div(BinaryOp):
    symbol: ClassVar[str] = "/"
    precedence: ClassVar[Precedence] = Precedence.PRODUCT
    right_binds_tighter: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Neg:
    operand: "Expr"


@dataclass(frozen=True, slots=True)
class Apply:
    callee: "Expr"
    args: tuple["Expr", ...] = ()


Expr = Union[Constant, Symbol, Add, Sub, Mul, Div, Neg, Apply]


def precedence_of(expr: Expr) -> Precedence:
    if isinstance(expr, Constant):
        value = expr.value
        # A non-integer fraction prints as a quotient, a negative number
        # with a leading minus.
        if isinstance(value, ExactValue) and value.value.denominator != 1:
            return Precedence.PRODUCT
        if isinstance(value, ExactValue) and value.value < 0:
            return Precedence.NEG
        if isinstance(value, DecimalValue) and value.value.is_signed() and not value.value.is_zero():
            return Precedence.NEG
        return Precedence.ATOM
    if isinstance(expr, Symbol):
        return Precedence.ATOM
    if isinstance(expr, BinaryOp):
        return expr.precedence
    if isinstance(expr, Neg):
        return Precedence.NEG
    if isinstance(expr, Apply):
        return Precedence.FUNCTION_OR_FACTORIAL
    raise TypeError(f"Unsupported expression node: {type(expr).__name__}")


def describe_kind(expr: Expr) -> str:
    """Classify a reduced expression as ``exact``, ``decimal`` or ``expression``."""

    if isinstance(expr, Constant):
        return "exact" if isinstance(expr.value, ExactValue) else "decimal"
    return "expression"


__all__ = [
    "Add",
    "Apply",
    "BinaryOp",
    "Constant",
    "Div",
    "Expr",
    "Mul",
    "Neg",
    "Precedence",
    "Sub",
    "Symbol",
    "describe_kind",
    "precedence_of",
]
