"""Numeric value types for exprcalc."""

from .value import INT64_MAX, INT64_MIN, Float, Integer, Value, fits_int64

__all__ = [
    "Value",
    "Integer",
    "Float",
    "INT64_MIN",
    "INT64_MAX",
    "fits_int64",
]
