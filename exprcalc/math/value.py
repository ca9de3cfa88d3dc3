"""
Numeric values produced by the evaluator.

A value is either an ``Integer`` (64-bit signed) or a ``Float`` (IEEE-754
double). Both are frozen pydantic models; every arithmetic step builds a new
instance instead of mutating an existing one.
"""

from __future__ import annotations

from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def fits_int64(value: int) -> bool:
    """Return True if ``value`` is representable as a signed 64-bit integer."""
    return INT64_MIN <= value <= INT64_MAX


class Value(BaseModel):
    """
    Base class for evaluator results.

    Subclasses set ``type_name`` and hold a single ``value`` field.
    """

    model_config = ConfigDict(frozen=True)

    type_name: ClassVar[str] = "value"

    value: Any

    def __init__(self, value: Any = None, **kwargs: Any):
        if value is not None:
            kwargs["value"] = value
        super().__init__(**kwargs)

    def to_float(self) -> float:
        """Promote to a Python float."""
        return float(self.value)

    def to_string(self) -> str:
        return repr(self.value)

    @property
    def is_integer(self) -> bool:
        return isinstance(self, Integer)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_string()})"


class Integer(Value):
    """Signed 64-bit integer value."""

    type_name: ClassVar[str] = "integer"

    value: Annotated[int, Field(strict=True, ge=INT64_MIN, le=INT64_MAX)]

    def to_string(self) -> str:
        return str(self.value)


class Float(Value):
    """IEEE-754 double value; inf and nan are allowed."""

    type_name: ClassVar[str] = "float"

    value: float = Field(allow_inf_nan=True)

    def __init__(self, value: float | int | None = None, **kwargs: Any):
        if isinstance(value, int):
            value = float(value)
        super().__init__(value, **kwargs)
