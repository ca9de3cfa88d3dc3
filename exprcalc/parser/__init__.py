"""
Expression Parser Package

This package provides scanning, parsing and evaluation of arithmetic
expressions: tokenization, AST construction, and tree-walking evaluation.
"""

from .ast import (
    ASTNode,
    BinaryKind,
    BinaryOp,
    FunctionCall,
    NodeArena,
    Number,
    UnaryKind,
    UnaryOp,
    Variable,
)
from .builtins import CONSTANTS, FUNCTIONS, BuiltinFunction
from .parser import Parser, parse
from .tokenizer import Token, Tokenizer, TokenType, scan
from .visitors import EvalVisitor, TreeVisitor, evaluate, format_tokens, format_tree

__all__ = [
    "ASTNode",
    "Number",
    "Variable",
    "BinaryOp",
    "BinaryKind",
    "UnaryOp",
    "UnaryKind",
    "FunctionCall",
    "NodeArena",
    "BuiltinFunction",
    "FUNCTIONS",
    "CONSTANTS",
    "Token",
    "TokenType",
    "Tokenizer",
    "scan",
    "Parser",
    "parse",
    "EvalVisitor",
    "TreeVisitor",
    "evaluate",
    "format_tokens",
    "format_tree",
]
