"""Parse one line of text into an expression tree.

Python's own grammar already has the precedence this language needs
(unary minus above ``*``/``/`` above ``+``/``-``), so the line is parsed
with :mod:`ast` and then converted node by node. Anything outside the
language is recorded as an issue; all issues of a line are raised together.
"""

from __future__ import annotations

import ast
import decimal
import re
from fractions import Fraction

from .errors import ParseError, ParseIssue
from .expr import Add, Apply, Constant, Div, Expr, Mul, Neg, Sub, Symbol
from .value import DecimalValue, ExactValue

# integer part without leading zeros, optional fraction, optional unsigned exponent
_NUMBER = re.compile(r"(?:0|[1-9]\d*)(?:\.\d*)?(?:e\d+)?", re.ASCII)

# Plain integer literals at least this long bypass the compiler, which
# refuses to convert them. They are read back through Decimal instead.
_LONG_INTEGER_DIGITS = 1000
_LONG_INTEGER = re.compile(r"(?<![\w.])\d{%d,}(?![\w.])" % _LONG_INTEGER_DIGITS, re.ASCII)

_BINARY_NODES = {
    ast.Add: Add,
    ast.Sub: Sub,
    ast.Mult: Mul,
    ast.Div: Div,
}

_OPERATOR_NAMES = {
    ast.Pow: "**",
    ast.Mod: "%",
    ast.FloorDiv: "//",
    ast.MatMult: "@",
    ast.LShift: "<<",
    ast.RShift: ">>",
    ast.BitAnd: "&",
    ast.BitOr: "|",
    ast.BitXor: "^",
    ast.UAdd: "unary +",
    ast.Invert: "~",
    ast.Not: "not",
}


class _Converter:
    def __init__(self, source: str, context: decimal.Context, long_integers: dict[int, str] | None = None):
        self.source = source
        self.context = context
        self.long_integers = long_integers or {}
        self.issues: list[ParseIssue] = []

    def _issue(self, node: ast.AST, message: str) -> Expr:
        self.issues.append(ParseIssue(getattr(node, "col_offset", 0), message))
        # Placeholder so conversion continues and later issues are reported.
        return Symbol("?")

    def convert(self, node: ast.AST) -> Expr:
        if isinstance(node, ast.Constant):
            return self._constant(node)
        if isinstance(node, ast.Name):
            literal = self.long_integers.get(node.col_offset)
            if literal is not None:
                if not _NUMBER.fullmatch(literal):
                    return self._issue(node, "invalid number: leading zeros")
                return Constant(ExactValue(Fraction(int(decimal.Decimal(literal)))))
            return Symbol(node.id)
        if isinstance(node, ast.UnaryOp):
            operand = self.convert(node.operand)
            if isinstance(node.op, ast.USub):
                return Neg(operand)
            return self._issue(node, f"operator '{_OPERATOR_NAMES.get(type(node.op), '?')}' is not supported")
        if isinstance(node, ast.BinOp):
            left = self.convert(node.left)
            right = self.convert(node.right)
            node_type = _BINARY_NODES.get(type(node.op))
            if node_type is None:
                return self._issue(node, f"operator '{_OPERATOR_NAMES.get(type(node.op), '?')}' is not supported")
            return node_type(left, right)
        if isinstance(node, ast.Call):
            callee = self.convert(node.func)
            args = []
            for arg in node.args:
                if isinstance(arg, ast.Starred):
                    args.append(self._issue(arg, "starred arguments are not supported"))
                else:
                    args.append(self.convert(arg))
            for keyword in node.keywords:
                self._issue(keyword.value, "keyword arguments are not supported")
            return Apply(callee, tuple(args))
        return self._issue(node, f"unsupported syntax '{type(node).__name__}'")

    def _constant(self, node: ast.Constant) -> Expr:
        value = node.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return self._issue(node, "only numeric literals are allowed")
        text = ast.get_source_segment(self.source, node)
        if text is None:  # pragma: no cover - positions are always available
            return self._issue(node, "could not read literal")
        if not _NUMBER.fullmatch(text):
            return self._issue(node, f"invalid number '{text}'")
        if isinstance(value, int):
            return Constant(ExactValue(Fraction(value)))
        # Use the literal text; going through float would lose digits.
        try:
            number = self.context.create_decimal(text)
        except decimal.Overflow:
            return self._issue(node, f"number '{text}' is too large")
        except decimal.InvalidOperation:
            return self._issue(node, f"invalid number '{text}'")
        return Constant(DecimalValue(number))


def parse(source: str, *, context: decimal.Context | None = None) -> Expr:
    """Parse ``source`` into an :data:`Expr`.

    Decimal literals are rounded in ``context`` (the active context when
    omitted). Raises :class:`ParseError` listing every issue found.
    """

    if not isinstance(source, str):
        raise ParseError([ParseIssue(0, "expression must be a string")])
    text = source.strip()
    if not text:
        raise ParseError([ParseIssue(0, "empty expression")])
    long_integers: dict[int, str] = {}

    def _hide(match: re.Match[str]) -> str:
        # ast reports columns as UTF-8 byte offsets.
        long_integers[len(text[: match.start()].encode("utf-8"))] = match.group()
        return "_" * len(match.group())

    try:
        tree = ast.parse(_LONG_INTEGER.sub(_hide, text), mode="eval")
    except SyntaxError as exc:
        column = max((exc.offset or 1) - 1, 0)
        raise ParseError([ParseIssue(column, exc.msg)]) from exc

    converter = _Converter(text, context or decimal.getcontext(), long_integers)
    expr = converter.convert(tree.body)
    if converter.issues:
        raise ParseError(sorted(converter.issues, key=lambda issue: issue.column))
    return expr


__all__ = ["parse"]
