"""
Recursive descent parser for arithmetic expressions.

One method per precedence level, lowest first:

    Expr     := AddSub
    AddSub   := MulDiv { ('+'|'-') MulDiv }
    MulDiv   := Prefix { ('*'|'/'|'%') Prefix }
    Prefix   := { ('+'|'-') } Power
    Power    := Primary [ '^' Prefix ]
    Primary  := number | '(' Expr ')' | Call | Identifier
    Call     := KnownFunctionName '(' [Expr {',' Expr}] ')'

``^`` is right-associative because its exponent re-enters ``Prefix``, and a
leading sign applies to the whole power (``-2^2`` is ``-(2^2)``).
"""

from __future__ import annotations

from typing import Sequence

from ..core.errors import (
    ExpectedPrimaryError,
    ExpectedRParenError,
    NestingTooDeepError,
    TrailingInputError,
)
from ..core.logging import get_logger
from .ast import ASTNode, BinaryKind, NodeArena, UnaryKind
from .builtins import is_function
from .tokenizer import Token, TokenType, scan

logger = get_logger(__name__)

DEFAULT_MAX_DEPTH = 100

ADD_SUB = {
    TokenType.PLUS: BinaryKind.ADD,
    TokenType.MINUS: BinaryKind.SUB,
}

MUL_DIV = {
    TokenType.MULTIPLY: BinaryKind.MUL,
    TokenType.DIVIDE: BinaryKind.DIV,
    TokenType.MODULO: BinaryKind.MOD,
}

SIGNS = {
    TokenType.PLUS: UnaryKind.POS,
    TokenType.MINUS: UnaryKind.NEG,
}


class Parser:
    """
    Builds an AST from a token sequence.

    The parser only moves a cursor over the tokens it is given; it never
    changes them. Nodes are allocated from ``arena``.
    """

    def __init__(self, arena: NodeArena | None = None, max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Args:
            arena: Owner for the nodes built (a fresh arena if omitted)
            max_depth: Maximum nesting of groups, calls, exponents and signs;
                operator chains such as ``1 + 2 + 3`` do not nest
        """
        self.arena = arena if arena is not None else NodeArena()
        self.max_depth = max_depth
        self.tokens: Sequence[Token] = ()
        self.pos = 0
        self.depth = 0

    def parse(self, tokens: Sequence[Token]) -> ASTNode:
        """
        Parse a complete token sequence.

        Args:
            tokens: Tokens from the scanner, ending with EOF

        Returns:
            Root AST node

        Raises:
            ParseError: If the tokens do not form exactly one expression
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token sequence must end with an EOF token")

        self.tokens = tokens
        self.pos = 0
        self.depth = 0

        ast = self.parse_add_sub()

        if self.current().type != TokenType.EOF:
            raise TrailingInputError(self.current())

        logger.debug("Parsed %d tokens into %d nodes", len(tokens), len(self.arena))
        return ast

    def parse_string(self, source: str) -> ASTNode:
        """Scan and parse ``source``."""
        return self.parse(scan(source))

    # Cursor

    def current(self) -> Token:
        """Get current token without consuming it."""
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        """Look ahead at token at offset from current position."""
        pos = self.pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return self.tokens[-1]  # EOF

    def advance(self) -> Token:
        """Consume and return current token; the cursor stops at EOF."""
        token = self.current()
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return token

    def _enter(self) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise NestingTooDeepError(self.current(), self.max_depth)

    def _leave(self, levels: int = 1) -> None:
        self.depth -= levels

    # Precedence levels

    def parse_add_sub(self) -> ASTNode:
        left = self.parse_mul_div()
        while self.current().type in ADD_SUB:
            op = self.advance()
            right = self.parse_mul_div()
            left = self.arena.binary(ADD_SUB[op.type], left, right, op.start, op.end)
        return left

    def parse_mul_div(self) -> ASTNode:
        left = self.parse_prefix()
        while self.current().type in MUL_DIV:
            op = self.advance()
            right = self.parse_prefix()
            left = self.arena.binary(MUL_DIV[op.type], left, right, op.start, op.end)
        return left

    def parse_prefix(self) -> ASTNode:
        """Parse zero or more signs followed by a power."""
        signs: list[Token] = []
        while self.current().type in SIGNS:
            self._enter()
            signs.append(self.advance())

        node = self.parse_power()

        # Innermost sign is the one closest to the operand
        for sign in reversed(signs):
            node = self.arena.unary(SIGNS[sign.type], node, sign.start, sign.end)
        self._leave(len(signs))
        return node

    def parse_power(self) -> ASTNode:
        base = self.parse_primary()
        if self.current().type != TokenType.POWER:
            return base

        op = self.advance()
        self._enter()
        exponent = self.parse_prefix()
        self._leave()
        return self.arena.binary(BinaryKind.POW, base, exponent, op.start, op.end)

    def parse_primary(self) -> ASTNode:
        token = self.current()

        if token.type == TokenType.NUMBER:
            self.advance()
            return self.arena.number(token.value, token.start, token.end)

        if token.type == TokenType.LPAREN:
            return self.parse_parenthesized()

        if token.type == TokenType.IDENTIFIER:
            if self.peek().type == TokenType.LPAREN:
                return self.parse_function_call()
            self.advance()
            return self.arena.variable(token.text, token.start, token.end)

        raise ExpectedPrimaryError(token)

    def parse_parenthesized(self) -> ASTNode:
        """Parse ``( Expr )``; the group itself adds no node."""
        self.advance()  # Consume (
        self._enter()
        inner = self.parse_add_sub()
        self._leave()

        if self.current().type != TokenType.RPAREN:
            raise ExpectedRParenError(self.current())
        self.advance()
        return inner

    def parse_function_call(self) -> ASTNode:
        """
        Parse ``name ( [Expr {, Expr}] )``.

        Only whitelisted names may be called; the argument count is left to
        the evaluator.
        """
        name_token = self.current()
        if not is_function(name_token.text):
            raise ExpectedPrimaryError(name_token, f"unknown function '{name_token.text}'")

        self.advance()  # Consume name
        self.advance()  # Consume (
        self._enter()

        args: list[ASTNode] = []
        if self.current().type != TokenType.RPAREN:
            args.append(self.parse_add_sub())
            while self.current().type == TokenType.COMMA:
                self.advance()  # Consume comma
                args.append(self.parse_add_sub())

        self._leave()
        if self.current().type != TokenType.RPAREN:
            raise ExpectedRParenError(self.current())
        self.advance()

        return self.arena.call(name_token.text, args, name_token.start, name_token.end)


def parse(tokens: Sequence[Token], arena: NodeArena | None = None, max_depth: int = DEFAULT_MAX_DEPTH) -> ASTNode:
    """Parse ``tokens`` with a fresh parser."""
    return Parser(arena, max_depth).parse(tokens)
