"""
Abstract Syntax Tree (AST) node definitions for arithmetic expressions.

Nodes form a closed set: number literals, variable references, binary and
unary operations, and calls to built-in functions. Operator kinds are enums,
validated when a node is constructed, so a node can never carry an unknown
operator. Traversal uses the Visitor pattern.

Nodes are allocated through a ``NodeArena`` owned by a single calculation and
released together when that calculation ends.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Protocol

from ..math.value import Value
from .builtins import is_function


class BinaryKind(Enum):
    """Binary operators."""

    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    POW = "pow"


class UnaryKind(Enum):
    """Prefix sign operators."""

    POS = "pos"
    NEG = "neg"


class ASTVisitor(Protocol):
    """
    Visitor protocol for traversing AST nodes.

    Implementations provide evaluation and tree rendering.
    """

    def visit_number(self, node: "Number") -> Any:
        ...

    def visit_variable(self, node: "Variable") -> Any:
        ...

    def visit_binary_op(self, node: "BinaryOp") -> Any:
        ...

    def visit_unary_op(self, node: "UnaryOp") -> Any:
        ...

    def visit_function_call(self, node: "FunctionCall") -> Any:
        ...


class ASTNode(ABC):
    """
    Base class for all AST nodes.

    ``start`` and ``end`` give the source span of the token that produced the
    node (the operator, sign, name or literal) and are used to position
    evaluation errors.
    """

    start: int
    end: int

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor for traversal."""
        pass

    def children(self) -> tuple["ASTNode", ...]:
        """Direct child nodes, left to right."""
        return ()

    @abstractmethod
    def __repr__(self) -> str:
        pass


# Leaf Nodes


class Number(ASTNode):
    """
    Represents a numeric literal.

    Examples: 42, 3.14, 1e-10
    """

    def __init__(self, value: Value, start: int = 0, end: int = 0):
        if not isinstance(value, Value):
            raise TypeError(f"Number requires a Value, got {type(value).__name__}")
        self.value = value
        self.start = start
        self.end = end

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_number(self)

    def __repr__(self) -> str:
        return f"Number({self.value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value


class Variable(ASTNode):
    """
    Represents a bare identifier.

    Examples: pi, e, x
    """

    def __init__(self, name: str, start: int = 0, end: int = 0):
        self.name = name
        self.start = start
        self.end = end

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_variable(self)

    def __repr__(self) -> str:
        return f"Variable('{self.name}')"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Variable) and self.name == other.name


# Composite Nodes


class BinaryOp(ASTNode):
    """
    Represents a binary operation.

    Examples: 2 + 3, 7 % 2, 2 ^ 10
    """

    def __init__(
        self, kind: BinaryKind | str, left: ASTNode, right: ASTNode, start: int = 0, end: int = 0
    ):
        self.kind = BinaryKind(kind)
        self.left = left
        self.right = right
        self.start = start
        self.end = end

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_binary_op(self)

    def children(self) -> tuple[ASTNode, ...]:
        return (self.left, self.right)

    def __repr__(self) -> str:
        return f"BinaryOp('{self.kind.value}', {self.left!r}, {self.right!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, BinaryOp)
            and self.kind == other.kind
            and self.left == other.left
            and self.right == other.right
        )


class UnaryOp(ASTNode):
    """
    Represents a prefix sign.

    Examples: -x, +5, --2
    """

    def __init__(self, kind: UnaryKind | str, operand: ASTNode, start: int = 0, end: int = 0):
        self.kind = UnaryKind(kind)
        self.operand = operand
        self.start = start
        self.end = end

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_unary_op(self)

    def children(self) -> tuple[ASTNode, ...]:
        return (self.operand,)

    def __repr__(self) -> str:
        return f"UnaryOp('{self.kind.value}', {self.operand!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, UnaryOp)
            and self.kind == other.kind
            and self.operand == other.operand
        )


class FunctionCall(ASTNode):
    """
    Represents a call to a built-in function.

    Examples: sin(x), sqrt(2), pow(2, 10)
    """

    def __init__(self, name: str, args: list[ASTNode], start: int = 0, end: int = 0):
        if not is_function(name):
            raise ValueError(f"Unknown function: {name}")
        self.name = name
        self.args = tuple(args)
        self.start = start
        self.end = end

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function_call(self)

    def children(self) -> tuple[ASTNode, ...]:
        return self.args

    def __repr__(self) -> str:
        args_repr = ", ".join(repr(arg) for arg in self.args)
        return f"FunctionCall('{self.name}', [{args_repr}])"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FunctionCall)
            and self.name == other.name
            and self.args == other.args
        )


class NodeArena:
    """
    Owns every node built for one calculation.

    The parser allocates through the factory methods; ``release`` drops all
    nodes at once. Use as a context manager to release on exit, whether the
    calculation succeeded or raised.
    """

    def __init__(self):
        self._nodes: list[ASTNode] = []
        self._released = False

    def __len__(self) -> int:
        return len(self._nodes)

    def __enter__(self) -> "NodeArena":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()

    @property
    def released(self) -> bool:
        return self._released

    def _own(self, node: ASTNode) -> ASTNode:
        if self._released:
            raise RuntimeError("Cannot allocate from a released arena")
        self._nodes.append(node)
        return node

    def number(self, value: Value, start: int = 0, end: int = 0) -> Number:
        return self._own(Number(value, start, end))

    def variable(self, name: str, start: int = 0, end: int = 0) -> Variable:
        return self._own(Variable(name, start, end))

    def binary(
        self, kind: BinaryKind | str, left: ASTNode, right: ASTNode, start: int = 0, end: int = 0
    ) -> BinaryOp:
        return self._own(BinaryOp(kind, left, right, start, end))

    def unary(self, kind: UnaryKind | str, operand: ASTNode, start: int = 0, end: int = 0) -> UnaryOp:
        return self._own(UnaryOp(kind, operand, start, end))

    def call(self, name: str, args: list[ASTNode], start: int = 0, end: int = 0) -> FunctionCall:
        return self._own(FunctionCall(name, args, start, end))

    def release(self) -> None:
        """Drop every node allocated so far."""
        self._nodes.clear()
        self._released = True
