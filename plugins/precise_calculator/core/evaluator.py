"""Tree-walking reducer over the expression tree."""

from __future__ import annotations

import decimal
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Mapping

from . import value as values
from .expr import Add, Apply, BinaryOp, Constant, Div, Expr, Mul, Neg, Sub, Symbol
from .errors import ApplyNotImplemented, EvaluationError, NumericOverflow
from .functions import FunctionSpec, default_registry, lookup
from .parser import parse
from .printer import Printer
from .value import DEFAULT_DISPLAY_DIGITS, Value


class PrecisionMode(str, Enum):
    DECENT = "decent"

    @property
    def digits(self) -> int:
        return {PrecisionMode.DECENT: 100}[self]


class RoundingMode(str, Enum):
    NEAREST = "nearest"
    ZERO = "zero"
    UP = "up"
    DOWN = "down"
    AWAY_ZERO = "away_zero"

    @property
    def decimal_rounding(self) -> str:
        return {
            RoundingMode.NEAREST: decimal.ROUND_HALF_EVEN,
            RoundingMode.ZERO: decimal.ROUND_DOWN,
            RoundingMode.UP: decimal.ROUND_CEILING,
            RoundingMode.DOWN: decimal.ROUND_FLOOR,
            RoundingMode.AWAY_ZERO: decimal.ROUND_UP,
        }[self]


_BINARY_OPERATIONS: dict[type, Callable[[Value, Value], Value]] = {
    Add: values.add,
    Sub: values.sub,
    Mul: values.mul,
    Div: values.checked_div,
}


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    expr: Expr
    text: str


@dataclass(slots=True)
class Evaluator:
    """Reduces expressions under one precision and rounding configuration.

    The configuration becomes the active :mod:`decimal` context for the
    duration of each :meth:`evaluate` call and is restored afterwards.
    """

    precision: PrecisionMode = PrecisionMode.DECENT
    rounding: RoundingMode = RoundingMode.NEAREST
    display_digits: int = DEFAULT_DISPLAY_DIGITS
    functions: Mapping[str, FunctionSpec] = field(default_factory=default_registry)

    def context(self) -> decimal.Context:
        return decimal.Context(
            prec=self.precision.digits,
            rounding=self.rounding.decimal_rounding,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )

    def parse(self, source: str) -> Expr:
        return parse(source, context=self.context())

    def evaluate(self, expr: Expr) -> Expr:
        """Reduce ``expr`` as far as possible.

        Unbound symbols are left in place inside arithmetic; any failure
        aborts the whole evaluation.
        """

        with decimal.localcontext(self.context()):
            try:
                return self._eval(expr)
            except decimal.Overflow as exc:
                raise NumericOverflow() from exc
            except decimal.DecimalException as exc:
                raise EvaluationError(f"invalid decimal operation: {type(exc).__name__}") from exc

    def render(self, expr: Expr) -> str:
        return Printer(round_digits=self.display_digits).print(expr)

    def run(self, source: str) -> EvaluationResult:
        """Parse, evaluate and print one line of input."""

        result = self.evaluate(self.parse(source))
        return EvaluationResult(expr=result, text=self.render(result))

    def _eval(self, expr: Expr) -> Expr:
        if isinstance(expr, (Constant, Symbol)):
            return expr
        if isinstance(expr, BinaryOp):
            return self._eval_binary(expr)
        if isinstance(expr, Neg):
            operand = self._eval(expr.operand)
            if isinstance(operand, Constant):
                return Constant(values.neg(operand.value))
            return Neg(operand)
        if isinstance(expr, Apply):
            return self._eval_apply(expr)
        raise TypeError(f"Unsupported expression node: {type(expr).__name__}")

    def _eval_binary(self, expr: BinaryOp) -> Expr:
        operation = _BINARY_OPERATIONS.get(type(expr))
        if operation is None:
            raise TypeError(f"Unsupported binary operator: {type(expr).__name__}")
        left = self._eval(expr.left)
        right = self._eval(expr.right)
        if isinstance(left, Constant) and isinstance(right, Constant):
            return Constant(operation(left.value, right.value))
        return type(expr)(left, right)

    def _eval_apply(self, expr: Apply) -> Expr:
        callee = self._eval(expr.callee)
        if not isinstance(callee, Symbol):
            raise ApplyNotImplemented("only named functions can be applied")
        spec = lookup(self.functions, callee.name, len(expr.args))
        args: list[Value] = []
        for arg in expr.args:
            reduced = self._eval(arg)
            if not isinstance(reduced, Constant):
                raise ApplyNotImplemented(f"'{callee.name}' needs a numeric argument")
            args.append(reduced.value)
        return Constant(spec.implementation(args))


__all__ = ["EvaluationResult", "Evaluator", "PrecisionMode", "RoundingMode"]
