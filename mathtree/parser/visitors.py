"""
AST Visitor implementations.

Visitors implement the Visitor pattern to traverse and operate on AST nodes:
- EvalVisitor: Evaluate a tree to a float
- StringVisitor: Render a tree back to infix text
"""

import math
from decimal import Decimal

from ..core.errors import DivisionByZero, DomainError, UnsupportedFunction
from .ast import ASTNode, FunctionNode, OperandNode, OperatorNode
from .context import Context
from .tokenizer import OperatorKind


class EvalVisitor:
    """
    Evaluate a tree to a numeric value.

    Evaluation is a depth-first walk with no side effects; visiting the same
    tree twice gives the same result.

    Raises:
        DivisionByZero: If a divisor's magnitude is below the context epsilon
        DomainError: If a function argument is outside its domain, or a value
            is not finite
        UnsupportedFunction: If a function has no implementation or the wrong
            number of arguments
    """

    def __init__(self, context: Context | None = None):
        self.context = context or Context.standard()

    def evaluate(self, node: ASTNode) -> float:
        return node.accept(self)

    def visit_operand(self, node: OperandNode) -> float:
        if not math.isfinite(node.value):
            raise DomainError("operand", [node.value], "not a finite number")
        return node.value

    def visit_operator(self, node: OperatorNode) -> float:
        left = node.left.accept(self)
        right = node.right.accept(self)

        if node.kind is OperatorKind.ADD:
            result = left + right
        elif node.kind is OperatorKind.SUB:
            result = left - right
        elif node.kind is OperatorKind.MUL:
            result = left * right
        elif node.kind is OperatorKind.DIV:
            if abs(right) < self.context.epsilon:
                raise DivisionByZero(right)
            result = left / right
        else:
            raise ValueError(f"Unsupported operator {node.kind.value!r}")

        if not math.isfinite(result):
            raise DomainError(node.kind.value, [left, right], "result out of range")
        return result

    def visit_function(self, node: FunctionNode) -> float:
        config = self.context.get_function(node.name)
        if config is None or config.evaluator is None:
            raise UnsupportedFunction(node.name, "not implemented")
        if config.arity is not None and len(node.args) != config.arity:
            raise UnsupportedFunction(
                node.name, f"expected {config.arity} argument(s), got {len(node.args)}"
            )

        args = [arg.accept(self) for arg in node.args]
        try:
            result = float(config.evaluator(*args))
        except ValueError as e:
            raise DomainError(node.name, args) from e
        except OverflowError as e:
            raise DomainError(node.name, args, "result out of range") from e

        if not math.isfinite(result):
            raise DomainError(node.name, args, "result out of range")
        return result


class StringVisitor:
    """
    Convert a tree to infix text.

    Parentheses are added only where precedence requires them:
    - OperatorNode(OperandNode(2), '+', OperandNode(3)) → "2 + 3"
    - FunctionNode('pow', [OperandNode(2), OperandNode(3)]) → "pow(2, 3)"
    """

    def __init__(self, context: Context | None = None):
        self.context = context or Context.standard()

    def visit_operand(self, node: OperandNode) -> str:
        # Positional notation only; the tokenizer does not read exponents
        if node.value.is_integer():
            return str(int(node.value))
        return format(Decimal(repr(node.value)), "f")

    def visit_operator(self, node: OperatorNode) -> str:
        left_str = node.left.accept(self)
        right_str = node.right.accept(self)

        left_prec = self._get_precedence(node.left)
        right_prec = self._get_precedence(node.right)
        op_prec = self.context.get_operator_precedence(node.kind.value)

        if left_prec > 0 and left_prec < op_prec:
            left_str = f"({left_str})"

        if right_prec > 0 and right_prec <= op_prec:
            right_str = f"({right_str})"

        return f"{left_str} {node.kind.value} {right_str}"

    def visit_function(self, node: FunctionNode) -> str:
        args_str = ", ".join(arg.accept(self) for arg in node.args)
        return f"{node.name}({args_str})"

    def _get_precedence(self, node: ASTNode) -> int:
        """Get precedence of a node for parenthesization."""
        if isinstance(node, OperatorNode):
            return self.context.get_operator_precedence(node.kind.value)
        return 0
