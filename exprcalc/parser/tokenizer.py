"""
Tokenizer for arithmetic expressions.

This module provides regex-based scanning of an expression into an ordered
list of tokens, each carrying the source span it was read from. Scanning is
eager: the whole input is tokenized up front and terminated by an EOF token.
"""

import re
from dataclasses import dataclass
from enum import Enum

from ..core.errors import InvalidCharacterError, InvalidNumberError
from ..core.logging import get_logger
from ..math.value import Float, Integer, Value, fits_int64

logger = get_logger(__name__)


class TokenType(Enum):
    """Token types for arithmetic expressions."""

    # Literals
    NUMBER = "number"
    IDENTIFIER = "identifier"

    # Operators
    PLUS = "add"
    MINUS = "sub"
    MULTIPLY = "mul"
    DIVIDE = "div"
    MODULO = "mod"
    POWER = "pow"

    # Delimiters
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"

    EOF = "eof"


@dataclass(frozen=True)
class Token:
    """
    Represents a single token in the expression.

    Attributes:
        type: The token type
        start: Offset of the first character in the source
        end: Offset one past the last character
        value: Numeric value, for NUMBER tokens
        text: Literal text, for IDENTIFIER tokens
    """

    type: TokenType
    start: int
    end: int
    value: Value | None = None
    text: str | None = None

    def display(self) -> str:
        """Render as ``kind`` or ``kind(value)``, one token per line."""
        if self.type == TokenType.NUMBER:
            return f"{self.type.value}({self.value})"
        if self.type == TokenType.IDENTIFIER:
            return f"{self.type.value}({self.text})"
        return self.type.value

    def describe(self) -> str:
        """Short description used in error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        return self.display()

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.display()!r}, {self.start}:{self.end})"


class Tokenizer:
    """
    Scans expressions using a single combined regex.

    The tokenizer handles:
    - Integer and float literals, with optional exponent
    - Identifiers (constant, variable and function names)
    - The operators ``+ - * / % ^``
    - Parentheses and commas
    """

    # Regex patterns for token matching; order matters
    PATTERNS = {
        # Exponent is only taken when at least one digit follows it
        "NUMBER": r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?",
        "IDENTIFIER": r"[A-Za-z][A-Za-z0-9_]*",
        "PLUS": r"\+",
        "MINUS": r"-",
        "MULTIPLY": r"\*",
        "DIVIDE": r"/",
        "MODULO": r"%",
        "POWER": r"\^",
        "LPAREN": r"\(",
        "RPAREN": r"\)",
        "COMMA": r",",
        # Whitespace (to skip)
        "WHITESPACE": r"[ \t\r\n\v\f]+",
    }

    def __init__(self):
        self._compile_patterns()

    def _compile_patterns(self) -> None:
        """Compile regex patterns for faster matching."""
        pattern_parts = [f"(?P<{name}>{pattern})" for name, pattern in self.PATTERNS.items()]
        self.combined_pattern = re.compile("|".join(pattern_parts))

    def tokenize(self, expression: str) -> list[Token]:
        """
        Tokenize an expression.

        Args:
            expression: The expression to tokenize

        Returns:
            List of tokens ending with an EOF token

        Raises:
            InvalidCharacterError: If a character starts no token
            InvalidNumberError: If an integer literal does not fit in 64 bits
        """
        tokens: list[Token] = []
        pos = 0

        while pos < len(expression):
            match = self.combined_pattern.match(expression, pos)

            if not match:
                raise InvalidCharacterError(expression[pos], pos)

            kind = match.lastgroup
            start, pos = match.start(), match.end()

            if kind == "WHITESPACE":
                continue

            if kind == "NUMBER":
                tokens.append(self._number(match.group(), start, pos))
            elif kind == "IDENTIFIER":
                tokens.append(Token(TokenType.IDENTIFIER, start, pos, text=match.group()))
            else:
                tokens.append(Token(TokenType[kind], start, pos))

        tokens.append(Token(TokenType.EOF, len(expression), len(expression)))

        logger.debug("Scanned %d tokens", len(tokens))
        return tokens

    def _number(self, text: str, start: int, end: int) -> Token:
        """Build a NUMBER token, tagging it Float or Integer by its shape."""
        if "." in text or "e" in text or "E" in text:
            return Token(TokenType.NUMBER, start, end, value=Float(float(text)))

        try:
            number = int(text)
        except ValueError as exc:  # digit-count limit on int()
            raise InvalidNumberError(text, start, end, str(exc)) from exc
        if not fits_int64(number):
            raise InvalidNumberError(text, start, end)
        return Token(TokenType.NUMBER, start, end, value=Integer(number))


def scan(source: str) -> list[Token]:
    """Tokenize ``source`` with a fresh tokenizer."""
    return Tokenizer().tokenize(source)
