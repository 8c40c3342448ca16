"""Numeric tower: exact rationals and context-rounded decimals.

A binary operation over two exact operands stays exact. As soon as one
operand is decimal, the other one is rounded into the active
:mod:`decimal` context first and the result is decimal as well. The context
is whatever the evaluator installed with :func:`decimal.localcontext`; values
never carry their own precision.
"""

from __future__ import annotations

import decimal
import operator
from dataclasses import dataclass
from fractions import Fraction
from typing import Callable, Union

from .errors import DivisionByZero

DEFAULT_DISPLAY_DIGITS = 8


@dataclass(frozen=True, slots=True)
class ExactValue:
    """Arbitrary-precision rational, always in lowest terms."""

    value: Fraction

    @classmethod
    def of(cls, numerator: int, denominator: int = 1) -> "ExactValue":
        return cls(Fraction(numerator, denominator))


@dataclass(frozen=True, slots=True)
class DecimalValue:
    """Decimal magnitude produced by rounding in the evaluator's context."""

    value: decimal.Decimal


Value = Union[ExactValue, DecimalValue]


def to_decimal(value: Value) -> decimal.Decimal:
    """Return ``value`` as a decimal rounded in the active context."""

    if isinstance(value, DecimalValue):
        return value.value
    if isinstance(value, ExactValue):
        ctx = decimal.getcontext()
        fraction = value.value
        # Integer conversion is exact; the single division does the rounding.
        return ctx.divide(decimal.Decimal(fraction.numerator), decimal.Decimal(fraction.denominator))
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def is_zero(value: Value) -> bool:
    """Compare ``value`` with the zero of its own representation."""

    if isinstance(value, ExactValue):
        return value.value == 0
    if isinstance(value, DecimalValue):
        return value.value.is_zero()
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def _perform(
    left: Value,
    right: Value,
    exact_op: Callable[[Fraction, Fraction], Fraction],
    decimal_op: Callable[[decimal.Decimal, decimal.Decimal], decimal.Decimal],
) -> Value:
    if isinstance(left, ExactValue) and isinstance(right, ExactValue):
        return ExactValue(exact_op(left.value, right.value))
    return DecimalValue(decimal_op(to_decimal(left), to_decimal(right)))


def add(left: Value, right: Value) -> Value:
    return _perform(left, right, operator.add, operator.add)


def sub(left: Value, right: Value) -> Value:
    return _perform(left, right, operator.sub, operator.sub)


def mul(left: Value, right: Value) -> Value:
    return _perform(left, right, operator.mul, operator.mul)


def checked_div(left: Value, right: Value) -> Value:
    """Divide, raising :class:`DivisionByZero` instead of producing inf/NaN."""

    if is_zero(right):
        raise DivisionByZero()
    return _perform(left, right, operator.truediv, operator.truediv)


def neg(value: Value) -> Value:
    if isinstance(value, ExactValue):
        return ExactValue(-value.value)
    if isinstance(value, DecimalValue):
        return DecimalValue(-value.value)
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def _display_context(digits: int) -> decimal.Context:
    return decimal.Context(
        prec=digits,
        rounding=decimal.ROUND_HALF_EVEN,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
    )


def format_decimal(value: decimal.Decimal, digits: int = DEFAULT_DISPLAY_DIGITS) -> str:
    """Render ``value`` with ``digits`` significant digits.

    The notation depends on the decimal exponent of the leading digit:
    scientific at ``-4`` and below, a ``0.`` prefix between ``-3`` and
    ``-1``, positional from ``0`` upwards. Zero of either sign prints as
    ``0``. The stored value is not touched.
    """

    if digits < 1:
        raise ValueError("digits must be at least 1")
    if not value.is_finite():
        return str(value)
    if value.is_zero():
        return "0"

    rounded = _display_context(digits).plus(value)
    sign_bit, digit_tuple, _ = rounded.as_tuple()
    sign = "-" if sign_bit else ""
    text = "".join(str(d) for d in digit_tuple).ljust(digits, "0")[:digits]
    exponent = rounded.adjusted()

    if exponent <= -4:
        mantissa = text[0] + ("." + text[1:] if len(text) > 1 else "")
        return f"{sign}{mantissa}e{exponent}"
    if exponent < 0:
        return f"{sign}0.{'0' * (-exponent - 1)}{text}"
    if exponent < digits - 1:
        return f"{sign}{text[:exponent + 1]}.{text[exponent + 1:]}"
    return f"{sign}{text}{'0' * (exponent + 1 - digits)}"


def format_integer(number: int) -> str:
    """Decimal digits of ``number``, without the interpreter's int-to-str length limit."""

    return str(decimal.Decimal(number))


def format_fraction(fraction: Fraction) -> str:
    if fraction.denominator == 1:
        return format_integer(fraction.numerator)
    return f"{format_integer(fraction.numerator)}/{format_integer(fraction.denominator)}"


def to_display_string(value: Value, digits: int = DEFAULT_DISPLAY_DIGITS) -> str:
    if isinstance(value, ExactValue):
        return format_fraction(value.value)
    if isinstance(value, DecimalValue):
        return format_decimal(value.value, digits)
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


__all__ = [
    "DEFAULT_DISPLAY_DIGITS",
    "DecimalValue",
    "ExactValue",
    "Value",
    "add",
    "checked_div",
    "format_decimal",
    "format_fraction",
    "format_integer",
    "is_zero",
    "mul",
    "neg",
    "sub",
    "to_decimal",
    "to_display_string",
]
