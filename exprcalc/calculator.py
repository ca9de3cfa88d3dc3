"""
Top-level calculation pipeline.

``calculate`` scans, parses and evaluates one expression. Each call owns its
tokens and node arena; nothing is kept or shared between calls.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from pydantic import BaseModel, ConfigDict, Field

from .core.logging import get_logger
from .math.value import Value
from .parser.ast import NodeArena
from .parser.parser import DEFAULT_MAX_DEPTH, Parser
from .parser.tokenizer import Tokenizer
from .parser.visitors import EvalVisitor, format_tokens, format_tree

logger = get_logger(__name__)


class CalcOptions(BaseModel):
    """Switches for one calculation."""

    model_config = ConfigDict(frozen=True)

    show_tokens: bool = Field(default=False, description="Print the token sequence")
    show_ast: bool = Field(default=False, description="Print the syntax tree")
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0, description="Parser nesting limit")


def calculate(
    expression: str,
    options: Optional[CalcOptions] = None,
    out: Optional[TextIO] = None,
) -> Value:
    """
    Evaluate ``expression``.

    Args:
        expression: Source text of one expression
        options: Debug printing and limits (defaults to ``CalcOptions()``)
        out: Stream for token/tree printing (defaults to stderr)

    Returns:
        An Integer or Float value

    Raises:
        CalcError: The first scan, parse or evaluation fault encountered
    """
    options = options or CalcOptions()
    out = out if out is not None else sys.stderr

    tokens = Tokenizer().tokenize(expression)
    if options.show_tokens:
        print(format_tokens(tokens), file=out)

    with NodeArena() as arena:
        root = Parser(arena, options.max_depth).parse(tokens)
        if options.show_ast:
            print(format_tree(root), file=out)

        result = EvalVisitor().evaluate(root)

    logger.debug("Evaluated %r to %r", expression, result)
    return result
