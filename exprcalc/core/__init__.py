"""Core utilities package"""

from .config import Settings, get_settings
from .errors import (
    CalcError,
    DivisionByZeroError,
    ErrorKind,
    EvalError,
    ExpectedPrimaryError,
    ExpectedRParenError,
    FloatModuloError,
    IntegerOverflowError,
    InvalidCharacterError,
    InvalidFunctionArgumentError,
    InvalidNumberError,
    NestingTooDeepError,
    ParseError,
    ScanError,
    TrailingInputError,
    UnknownVariableError,
    WrongArgumentCountError,
)
from .logging import get_context_logger, get_history_logger, get_logger, setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "get_logger",
    "get_context_logger",
    "get_history_logger",
    "ErrorKind",
    "CalcError",
    "ScanError",
    "InvalidCharacterError",
    "InvalidNumberError",
    "ParseError",
    "ExpectedPrimaryError",
    "ExpectedRParenError",
    "TrailingInputError",
    "NestingTooDeepError",
    "EvalError",
    "DivisionByZeroError",
    "FloatModuloError",
    "IntegerOverflowError",
    "InvalidFunctionArgumentError",
    "WrongArgumentCountError",
    "UnknownVariableError",
]
