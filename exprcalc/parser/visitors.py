"""
AST Visitor implementations.

- EvalVisitor: evaluate an AST to an Integer or Float value
- TreeVisitor: render an AST as an indented tree for debugging

``format_tokens`` renders a token sequence one token per line.
"""

from __future__ import annotations

from typing import Callable, Sequence

from ..core.errors import (
    DivisionByZeroError,
    FloatModuloError,
    IntegerOverflowError,
    InvalidFunctionArgumentError,
    UnknownVariableError,
    WrongArgumentCountError,
)
from ..math.value import Float, Integer, Value, fits_int64
from .ast import ASTNode, BinaryKind, BinaryOp, FunctionCall, Number, UnaryKind, UnaryOp, Variable
from .builtins import CONSTANTS, get_function, ieee_pow
from .tokenizer import Token


class EvalVisitor:
    """
    Evaluate an AST.

    Integer ``+ - *`` are checked against the 64-bit range; a float on either
    side promotes the other operand. ``/`` and ``^`` always produce floats,
    and ``%`` accepts integers only. Evaluation holds no state between
    calls, so one visitor may be reused.
    """

    def __init__(self):
        self._binary: dict[BinaryKind, Callable[[Value, Value, BinaryOp], Value]] = {
            BinaryKind.ADD: self._add,
            BinaryKind.SUB: self._sub,
            BinaryKind.MUL: self._mul,
            BinaryKind.DIV: self._div,
            BinaryKind.MOD: self._mod,
            BinaryKind.POW: self._pow,
        }

    def evaluate(self, node: ASTNode) -> Value:
        return node.accept(self)

    def visit_number(self, node: Number) -> Value:
        return node.value

    def visit_variable(self, node: Variable) -> Value:
        if node.name in CONSTANTS:
            return Float(CONSTANTS[node.name])
        raise UnknownVariableError(node.name, node.start, node.end)

    def visit_binary_op(self, node: BinaryOp) -> Value:
        # Left spine in a loop; operator chains may be arbitrarily long
        spine = [node]
        while isinstance(spine[-1].left, BinaryOp):
            spine.append(spine[-1].left)

        result = spine[-1].left.accept(self)
        for op in reversed(spine):
            right = op.right.accept(self)
            result = self._binary[op.kind](result, right, op)
        return result

    def visit_unary_op(self, node: UnaryOp) -> Value:
        operand = node.operand.accept(self)

        if node.kind == UnaryKind.POS:
            return operand
        if isinstance(operand, Integer):
            return self._checked(-operand.value, "negation", node)
        return Float(-operand.value)

    def visit_function_call(self, node: FunctionCall) -> Value:
        func = get_function(node.name)
        args = [arg.accept(self) for arg in node.args]

        if len(args) != func.arity:
            raise WrongArgumentCountError(node.name, func.arity, len(args), node.start, node.end)

        if func.preserves_integer and isinstance(args[0], Integer):
            return self._checked(func.compute(args[0].value), node.name, node)

        values = [arg.to_float() for arg in args]
        if func.domain is not None:
            for value in values:
                if not func.domain(value):
                    raise InvalidFunctionArgumentError(
                        node.name, value, func.domain_message, node.start, node.end
                    )
        return Float(func.compute(*values))

    # Operators

    def _checked(self, result: int, operation: str, node: ASTNode) -> Integer:
        if not fits_int64(result):
            raise IntegerOverflowError(operation, node.start, node.end)
        return Integer(result)

    def _add(self, left: Value, right: Value, node: BinaryOp) -> Value:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self._checked(left.value + right.value, "addition", node)
        return Float(left.to_float() + right.to_float())

    def _sub(self, left: Value, right: Value, node: BinaryOp) -> Value:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self._checked(left.value - right.value, "subtraction", node)
        return Float(left.to_float() - right.to_float())

    def _mul(self, left: Value, right: Value, node: BinaryOp) -> Value:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self._checked(left.value * right.value, "multiplication", node)
        return Float(left.to_float() * right.to_float())

    def _div(self, left: Value, right: Value, node: BinaryOp) -> Value:
        divisor = right.to_float()
        if divisor == 0.0:
            raise DivisionByZeroError(node.start, node.end)
        return Float(left.to_float() / divisor)

    def _mod(self, left: Value, right: Value, node: BinaryOp) -> Value:
        if not (isinstance(left, Integer) and isinstance(right, Integer)):
            raise FloatModuloError(node.start, node.end)
        if right.value == 0:
            raise DivisionByZeroError(node.start, node.end)
        # Truncated remainder: the result takes the sign of the dividend
        remainder = abs(left.value) % abs(right.value)
        return Integer(-remainder if left.value < 0 else remainder)

    def _pow(self, left: Value, right: Value, node: BinaryOp) -> Value:
        return Float(ieee_pow(left.to_float(), right.to_float()))


def evaluate(node: ASTNode) -> Value:
    """Evaluate ``node`` with a fresh visitor."""
    return EvalVisitor().evaluate(node)


class TreeVisitor:
    """
    Render an AST as a tree, one node per line.

    Example for ``1 + 2 * 3``::

        add
        ├── number(1)
        └── mul
            ├── number(2)
            └── number(3)
    """

    BRANCH = "├── "
    LAST = "└── "
    GUIDE = "│   "
    BLANK = "    "

    def render(self, root: ASTNode) -> str:
        lines = [root.accept(self)]
        # Explicit stack of (node, prefix, is_last), popped in source order
        stack = self._pending(root, "")
        while stack:
            node, prefix, is_last = stack.pop()
            lines.append(prefix + (self.LAST if is_last else self.BRANCH) + node.accept(self))
            stack.extend(self._pending(node, prefix + (self.BLANK if is_last else self.GUIDE)))
        return "\n".join(lines)

    def _pending(self, node: ASTNode, prefix: str) -> list[tuple[ASTNode, str, bool]]:
        children = node.children()
        last = len(children) - 1
        return [(child, prefix, index == last) for index, child in reversed(list(enumerate(children)))]

    # Node labels

    def visit_number(self, node: Number) -> str:
        return f"number({node.value})"

    def visit_variable(self, node: Variable) -> str:
        return node.name

    def visit_binary_op(self, node: BinaryOp) -> str:
        return node.kind.value

    def visit_unary_op(self, node: UnaryOp) -> str:
        return node.kind.value

    def visit_function_call(self, node: FunctionCall) -> str:
        return node.name


def format_tree(root: ASTNode) -> str:
    return TreeVisitor().render(root)


def format_tokens(tokens: Sequence[Token]) -> str:
    """Render tokens one per line as ``kind`` or ``kind(value)``."""
    return "\n".join(token.display() for token in tokens)
