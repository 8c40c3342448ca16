"""Render expressions back to text with minimal parentheses."""

from __future__ import annotations

from .expr import Apply, BinaryOp, Constant, Expr, Neg, Precedence, Symbol, precedence_of
from .value import DEFAULT_DISPLAY_DIGITS, to_display_string


class Printer:
    """Prints an expression, wrapping a subtree in parentheses only when its
    precedence is lower than the one its position requires."""

    def __init__(self, round_digits: int = DEFAULT_DISPLAY_DIGITS):
        if round_digits < 1:
            raise ValueError("round_digits must be at least 1")
        self.round_digits = round_digits

    def print(self, expr: Expr) -> str:
        parts: list[str] = []
        self._print(expr, Precedence.NO_PRECEDENCE, parts)
        return "".join(parts)

    def _print(self, expr: Expr, required: Precedence, out: list[str]) -> None:
        own = precedence_of(expr)
        parens = own < required
        if parens:
            out.append("(")

        if isinstance(expr, Constant):
            out.append(to_display_string(expr.value, self.round_digits))
        elif isinstance(expr, Symbol):
            out.append(expr.name)
        elif isinstance(expr, Neg):
            out.append("-")
            self._print(expr.operand, Precedence.NEG, out)
        elif isinstance(expr, BinaryOp):
            self._print(expr.left, own, out)
            out.append(expr.symbol)
            right = Precedence(own + 1) if expr.right_binds_tighter else own
            self._print(expr.right, right, out)
        elif isinstance(expr, Apply):
            out.append('"')
            self._print(expr.callee, Precedence.NO_PRECEDENCE, out)
            out.append('"(')
            for index, arg in enumerate(expr.args):
                if index:
                    out.append(",")
                self._print(arg, Precedence.NO_PRECEDENCE, out)
            out.append(")")
        else:
            raise TypeError(f"Unsupported expression node: {type(expr).__name__}")

        if parens:
            out.append(")")


def print_expr(expr: Expr, *, round_digits: int = DEFAULT_DISPLAY_DIGITS) -> str:
    return Printer(round_digits=round_digits).print(expr)


__all__ = ["Printer", "print_expr"]
