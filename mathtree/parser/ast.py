"""
Abstract Syntax Tree (AST) node definitions for arithmetic expressions.

A tree is built once by the TreeBuilder and only read afterwards. Each node
owns its children; trees are finite and acyclic. Operations on trees
(evaluation, rendering) are visitors.
"""

from abc import ABC, abstractmethod
from typing import Any, Protocol

from .tokenizer import FunctionKind, OperatorKind


class ASTVisitor(Protocol):
    """
    Visitor protocol for traversing AST nodes.

    Implementations provide evaluation, string rendering, etc.
    """

    def visit_operand(self, node: "OperandNode") -> Any:
        ...

    def visit_operator(self, node: "OperatorNode") -> Any:
        ...

    def visit_function(self, node: "FunctionNode") -> Any:
        ...


class ASTNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor for traversal."""
        pass

    @property
    def children(self) -> list["ASTNode"]:
        return []

    def depth(self) -> int:
        """Number of nodes on the longest root-to-leaf path."""
        return 1 + max((child.depth() for child in self.children), default=0)

    def size(self) -> int:
        """Total number of nodes in the tree."""
        return 1 + sum(child.size() for child in self.children)

    @abstractmethod
    def __repr__(self) -> str:
        """Return string representation for debugging."""
        pass


class OperandNode(ASTNode):
    """
    A numeric leaf.

    Examples: 42, 3.14
    """

    def __init__(self, value: float | int):
        self.value = float(value)

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_operand(self)

    def __repr__(self) -> str:
        return f"OperandNode({self.value})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, OperandNode) and self.value == other.value


class OperatorNode(ASTNode):
    """
    A binary arithmetic operation.

    ``left`` is the operand written first: ``2 - 3`` is
    ``OperatorNode(SUB, OperandNode(2), OperandNode(3))``.
    """

    def __init__(self, kind: OperatorKind, left: ASTNode, right: ASTNode):
        if kind.is_bracket:
            raise ValueError(f"'{kind.value}' is not a binary operator")
        self.kind = kind
        self.left = left
        self.right = right

    @property
    def children(self) -> list[ASTNode]:
        return [self.left, self.right]

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_operator(self)

    def __repr__(self) -> str:
        return f"OperatorNode({self.left!r}, '{self.kind.value}', {self.right!r})"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, OperatorNode)
            and self.kind == other.kind
            and self.left == other.left
            and self.right == other.right
        )


class FunctionNode(ASTNode):
    """
    A function call.

    Examples: sin(0), pow(2, 10)
    """

    def __init__(self, kind: FunctionKind, args: list[ASTNode]):
        self.kind = kind
        self.args = args

    @property
    def children(self) -> list[ASTNode]:
        return list(self.args)

    @property
    def name(self) -> str:
        return self.kind.value

    def accept(self, visitor: ASTVisitor) -> Any:
        return visitor.visit_function(self)

    def __repr__(self) -> str:
        args_repr = ", ".join(repr(arg) for arg in self.args)
        return f"FunctionNode('{self.name}', [{args_repr}])"

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, FunctionNode)
            and self.kind == other.kind
            and self.args == other.args
        )
