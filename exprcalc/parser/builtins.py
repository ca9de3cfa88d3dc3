"""
Built-in functions and constants.

The parser consults ``FUNCTIONS`` to decide whether ``name(`` starts a call;
the evaluator consults it to check arity and compute results. Both tables are
read-only mappings, so adding a function is a single entry here.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping


@dataclass(frozen=True)
class BuiltinFunction:
    """Configuration for a built-in function."""

    name: str
    arity: int
    compute: Callable[..., float]
    domain: Callable[[float], bool] | None = None
    domain_message: str = ""
    preserves_integer: bool = False  # integer argument gives integer result


def ieee_pow(base: float, exponent: float) -> float:
    """
    Floating power with IEEE-754 results instead of Python exceptions.

    ``math.pow`` raises where C's ``pow`` returns inf or nan; map those cases
    back to the IEEE values.
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return _signed_inf(base, exponent)
    except ValueError:
        if base == 0.0:
            return _signed_inf(base, exponent)
        return math.nan


def _signed_inf(base: float, exponent: float) -> float:
    odd = exponent.is_integer() and exponent % 2 == 1
    return math.copysign(math.inf, base) if odd else math.inf


def _nan_on_domain_error(func: Callable[[float], float]) -> Callable[[float], float]:
    def wrapper(x: float) -> float:
        try:
            return func(x)
        except ValueError:  # e.g. sin(inf)
            return math.nan

    wrapper.__name__ = func.__name__
    return wrapper


# Domain checks are written as negations so nan passes through
FUNCTIONS: Mapping[str, BuiltinFunction] = MappingProxyType(
    {
        "abs": BuiltinFunction("abs", 1, abs, preserves_integer=True),
        "sqrt": BuiltinFunction(
            "sqrt", 1, math.sqrt, domain=lambda x: not x < 0, domain_message="must be >= 0"
        ),
        "pow": BuiltinFunction("pow", 2, ieee_pow),
        "sin": BuiltinFunction("sin", 1, _nan_on_domain_error(math.sin)),
        "cos": BuiltinFunction("cos", 1, _nan_on_domain_error(math.cos)),
        "tan": BuiltinFunction("tan", 1, _nan_on_domain_error(math.tan)),
        "log": BuiltinFunction(
            "log", 1, math.log10, domain=lambda x: not x <= 0, domain_message="must be > 0"
        ),
        "ln": BuiltinFunction(
            "ln", 1, math.log, domain=lambda x: not x <= 0, domain_message="must be > 0"
        ),
    }
)

CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "pi": math.pi,
        "e": math.e,
    }
)


def is_function(name: str) -> bool:
    """Check if ``name`` is a known function."""
    return name in FUNCTIONS


def get_function(name: str) -> BuiltinFunction:
    return FUNCTIONS[name]
