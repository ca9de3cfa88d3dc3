"""
Calculation exceptions.

Every fault raised while scanning, parsing or evaluating an expression derives
from ``CalcError``. Faults carry the source span that caused them so a caller
can render a diagnostic; they never format or print anything themselves.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Optional

if TYPE_CHECKING:
    from ..parser.tokenizer import Token, TokenType


class ErrorKind(str, Enum):
    """Closed set of fault kinds."""

    # Lexical
    INVALID_CHARACTER = "InvalidCharacter"
    INVALID_NUMBER = "InvalidNumber"

    # Syntactic
    EXPECTED_PRIMARY = "ExpectedPrimary"
    EXPECTED_RPAREN = "ExpectedRParen"
    TRAILING_INPUT = "TrailingInput"
    NESTING_TOO_DEEP = "NestingTooDeep"

    # Runtime
    DIVISION_BY_ZERO = "DivisionByZero"
    FLOAT_MODULO = "FloatModulo"
    OVERFLOW = "Overflow"
    INVALID_FUNCTION_ARGUMENT = "InvalidFunctionArgument"
    WRONG_ARGUMENT_COUNT = "WrongArgumentCount"
    UNKNOWN_VARIABLE = "UnknownVariable"


class CalcError(Exception):
    """Base exception for calculation faults"""

    kind: ClassVar[ErrorKind]

    def __init__(
        self,
        message: str,
        start: int = 0,
        end: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.start = start
        self.end = start if end is None else end
        self.details = details or {}
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, start={self.start}, end={self.end})"


# Lexical errors


class ScanError(CalcError):
    """Raised when the source cannot be split into tokens"""


class InvalidCharacterError(ScanError):
    """Raised for a character that starts no token"""

    kind = ErrorKind.INVALID_CHARACTER

    def __init__(self, char: str, pos: int):
        super().__init__(
            message=f"invalid character {char!r}",
            start=pos,
            end=pos + 1,
            details={"char": char},
        )


class InvalidNumberError(ScanError):
    """Raised for a numeric literal that does not fit its type"""

    kind = ErrorKind.INVALID_NUMBER

    def __init__(self, text: str, start: int, end: int, reason: str = "integer literal out of range"):
        super().__init__(
            message=f"invalid number '{text}': {reason}",
            start=start,
            end=end,
            details={"text": text},
        )


# Syntax errors


class ParseError(CalcError):
    """Raised when the token sequence is not a valid expression"""

    def __init__(self, message: str, token: "Token"):
        self.token = token
        self.found: "TokenType" = token.type
        super().__init__(
            message=f"{message}, found {token.describe()}",
            start=token.start,
            end=token.end,
            details={"found": token.type.value},
        )


class ExpectedPrimaryError(ParseError):
    """Raised when a number, group, call or identifier was expected"""

    kind = ErrorKind.EXPECTED_PRIMARY

    def __init__(self, token: "Token", message: str = "expected a number, '(' or a name"):
        super().__init__(message, token)


class ExpectedRParenError(ParseError):
    """Raised when a group or argument list is not closed"""

    kind = ErrorKind.EXPECTED_RPAREN

    def __init__(self, token: "Token"):
        super().__init__("expected ')'", token)


class TrailingInputError(ParseError):
    """Raised when tokens remain after a complete expression"""

    kind = ErrorKind.TRAILING_INPUT

    def __init__(self, token: "Token"):
        super().__init__("unexpected input after expression", token)


class NestingTooDeepError(ParseError):
    """Raised when the expression nests deeper than the parser allows"""

    kind = ErrorKind.NESTING_TOO_DEEP

    def __init__(self, token: "Token", limit: int):
        super().__init__(f"expression nested deeper than {limit} levels", token)
        self.details["limit"] = limit


# Runtime errors


class EvalError(CalcError):
    """Raised when a well-formed expression cannot be evaluated"""


class DivisionByZeroError(EvalError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, start: int = 0, end: Optional[int] = None):
        super().__init__("division by zero", start, end)


class FloatModuloError(EvalError):
    kind = ErrorKind.FLOAT_MODULO

    def __init__(self, start: int = 0, end: Optional[int] = None):
        super().__init__("modulo requires integer operands", start, end)


class IntegerOverflowError(EvalError):
    """Raised when checked integer arithmetic leaves the 64-bit range"""

    kind = ErrorKind.OVERFLOW

    def __init__(self, operation: str, start: int = 0, end: Optional[int] = None):
        super().__init__(
            f"integer overflow in {operation}",
            start,
            end,
            details={"operation": operation},
        )


class InvalidFunctionArgumentError(EvalError):
    """Raised when a function argument is outside its domain"""

    kind = ErrorKind.INVALID_FUNCTION_ARGUMENT

    def __init__(self, name: str, argument: Any, requirement: str, start: int = 0, end: Optional[int] = None):
        super().__init__(
            f"invalid argument to {name}(): {argument} ({requirement})",
            start,
            end,
            details={"function": name, "argument": argument},
        )


class WrongArgumentCountError(EvalError):
    kind = ErrorKind.WRONG_ARGUMENT_COUNT

    def __init__(self, name: str, expected: int, got: int, start: int = 0, end: Optional[int] = None):
        plural = "" if expected == 1 else "s"
        super().__init__(
            f"{name}() takes {expected} argument{plural}, got {got}",
            start,
            end,
            details={"function": name, "expected": expected, "got": got},
        )


class UnknownVariableError(EvalError):
    kind = ErrorKind.UNKNOWN_VARIABLE

    def __init__(self, name: str, start: int = 0, end: Optional[int] = None):
        super().__init__(
            f"unknown variable '{name}'",
            start,
            end,
            details={"name": name},
        )
