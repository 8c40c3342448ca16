"""Fixed-accuracy sine for arbitrary-precision decimals.

The argument is reduced modulo pi, folded into ``[0, pi/2]`` and then
evaluated with one of two ten-term polynomials: the odd sine series on
``[0, pi/4]`` and the even cosine series of ``pi/2 - x`` above it.

The polynomials are truncated Maclaurin series, so the absolute error is
bounded by the first omitted term, below ``3.3e-21`` on ``[0, pi/4]``. The
bound does not depend on the active precision: with the default 100-digit
context every digit past the twentieth decimal place is noise.
"""

from __future__ import annotations

import decimal
import math
from dataclasses import dataclass
from threading import Lock
from typing import Sequence

TABLE_DIGITS = 120
POLYNOMIAL_TERMS = 10
ERROR_BOUND = decimal.Decimal("1e-20")


@dataclass(frozen=True, slots=True)
class TrigConstants:
    pi: decimal.Decimal
    half_pi: decimal.Decimal
    quarter_pi: decimal.Decimal
    sin_coefficients: tuple[decimal.Decimal, ...]
    cos_coefficients: tuple[decimal.Decimal, ...]


_CONSTANTS: TrigConstants | None = None
_CONSTANTS_LOCK = Lock()


def _table_context() -> decimal.Context:
    return decimal.Context(prec=TABLE_DIGITS, rounding=decimal.ROUND_HALF_EVEN)


def _compute_pi(ctx: decimal.Context) -> decimal.Decimal:
    """Series for pi from the :mod:`decimal` recipes, two guard digits."""

    with decimal.localcontext(ctx) as local:
        local.prec += 2
        three = decimal.Decimal(3)
        last, total = 0, three
        term, n, na, d, da = three, 1, 0, 0, 24
        while total != last:
            last = total
            n, na = n + na, na + 8
            d, da = d + da, da + 32
            term = (term * n) / d
            total += term
    return ctx.plus(total)


def _coefficients(offset: int, ctx: decimal.Context) -> tuple[decimal.Decimal, ...]:
    # (-1)^k / (2k + offset)!
    return tuple(
        ctx.divide(decimal.Decimal((-1) ** k), decimal.Decimal(math.factorial(2 * k + offset)))
        for k in range(POLYNOMIAL_TERMS)
    )


def _build_constants() -> TrigConstants:
    ctx = _table_context()
    pi = _compute_pi(ctx)
    return TrigConstants(
        pi=pi,
        half_pi=ctx.divide(pi, 2),
        quarter_pi=ctx.divide(pi, 4),
        sin_coefficients=_coefficients(1, ctx),
        cos_coefficients=_coefficients(0, ctx),
    )


def constants() -> TrigConstants:
    """Return the process-wide constant table, building it on first use."""

    global _CONSTANTS
    if _CONSTANTS is None:
        with _CONSTANTS_LOCK:
            if _CONSTANTS is None:
                _CONSTANTS = _build_constants()
    return _CONSTANTS


def _coefficient(value: decimal.Decimal) -> tuple[int, int]:
    _, digits, exponent = value.as_tuple()
    return int("".join(str(d) for d in digits) or "0"), exponent


def reduce_modulo_pi(x: decimal.Decimal, pi: decimal.Decimal) -> tuple[decimal.Decimal, bool]:
    """Return ``(x - k*pi, k is odd)`` with ``k = floor(x / pi)`` for ``x >= 0``.

    Both operands are finite decimals, i.e. integers scaled by a power of ten,
    so the remainder is computed exactly in integer arithmetic. Reducing
    modulo ``2*pi`` yields the parity of ``k`` at the same time.
    """

    if x < pi:
        return x, False
    x_coefficient, x_exponent = _coefficient(x)
    pi_coefficient, pi_exponent = _coefficient(pi)
    scale = min(x_exponent, pi_exponent)
    pi_scaled = pi_coefficient * 10 ** (pi_exponent - scale)
    modulus = 2 * pi_scaled
    # pow keeps this cheap for inputs with very large exponents.
    remainder = (x_coefficient % modulus) * pow(10, x_exponent - scale, modulus) % modulus
    odd = remainder >= pi_scaled
    if odd:
        remainder -= pi_scaled
    digits = tuple(int(c) for c in str(remainder))
    return decimal.Decimal((0, digits, scale)), odd


def _horner(square: decimal.Decimal, coefficients: Sequence[decimal.Decimal]) -> decimal.Decimal:
    acc = decimal.Decimal(0)
    for coefficient in reversed(coefficients):
        acc = acc * square + coefficient
    return acc


def sin(x: decimal.Decimal) -> decimal.Decimal:
    """Approximate ``sin(x)`` in the active decimal context.

    Accurate to :data:`ERROR_BOUND` for every finite ``x``.
    """

    if not x.is_finite():
        raise ValueError("sin is only defined for finite values")
    if x.is_zero():
        return decimal.Decimal(0)

    table = constants()
    negative = x.is_signed()
    reduced, odd = reduce_modulo_pi(x.copy_abs(), table.pi)
    if odd:
        negative = not negative
    if reduced > table.half_pi:
        reduced = table.pi - reduced

    if reduced <= table.quarter_pi:
        result = reduced * _horner(reduced * reduced, table.sin_coefficients)
    else:
        complement = table.half_pi - reduced
        result = _horner(complement * complement, table.cos_coefficients)
    return -result if negative else +result


__all__ = [
    "ERROR_BOUND",
    "POLYNOMIAL_TERMS",
    "TABLE_DIGITS",
    "TrigConstants",
    "constants",
    "reduce_modulo_pi",
    "sin",
]
