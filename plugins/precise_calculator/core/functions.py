"""Registry of the functions an ``Apply`` node may reduce to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from . import trig
from .errors import ApplyNotImplemented
from .value import DecimalValue, ExactValue, Value


@dataclass(frozen=True, slots=True)
class FunctionSpec:
    name: str
    arity: int
    implementation: Callable[[Sequence[Value]], Value]
    summary: str = ""


def _sin(args: Sequence[Value]) -> Value:
    (arg,) = args
    if isinstance(arg, DecimalValue):
        return DecimalValue(trig.sin(arg.value))
    if isinstance(arg, ExactValue):
        raise ApplyNotImplemented("sin is not defined for exact arguments; use a decimal literal such as 1.0")
    raise TypeError(f"Unsupported value type: {type(arg).__name__}")


def default_registry() -> dict[str, FunctionSpec]:
    specs = [
        FunctionSpec("sin", 1, _sin, "Sine of a decimal angle in radians"),
    ]
    return {spec.name: spec for spec in specs}


def lookup(registry: Mapping[str, FunctionSpec], name: str, arity: int) -> FunctionSpec:
    """Return the registered function or raise :class:`ApplyNotImplemented`."""

    spec = registry.get(name)
    if spec is None:
        raise ApplyNotImplemented(f"function '{name}' is not implemented")
    if spec.arity != arity:
        raise ApplyNotImplemented(
            f"function '{name}' takes {spec.arity} argument{'s' if spec.arity != 1 else ''}, got {arity}"
        )
    return spec


__all__ = ["FunctionSpec", "default_registry", "lookup"]
