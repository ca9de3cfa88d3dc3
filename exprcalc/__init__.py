"""
exprcalc - arithmetic expression calculator.

Scans, parses and evaluates expressions with integer/float arithmetic,
built-in functions (abs, sqrt, pow, sin, cos, tan, log, ln) and the
constants pi and e.
"""

__version__ = "0.1.0"

from .calculator import CalcOptions, calculate
from .core.errors import CalcError, ErrorKind, EvalError, ParseError, ScanError
from .diagnostics import Location, locate, render_diagnostic
from .math.value import Float, Integer, Value

__all__ = [
    "__version__",
    "calculate",
    "CalcOptions",
    "Value",
    "Integer",
    "Float",
    "CalcError",
    "ScanError",
    "ParseError",
    "EvalError",
    "ErrorKind",
    "Location",
    "locate",
    "render_diagnostic",
]
