"""
Tree builder using operator-precedence (shunting-yard) construction.

Two stacks are kept while walking the flat token sequence: one for pending
operators and brackets, one for finished subtrees. An operator is reduced
(popped together with the two topmost subtrees) when a later operator of
lower or equal precedence arrives, when its enclosing bracket closes, or at
the end of input.
"""

from ..core.errors import (
    InsufficientOperands,
    MalformedExpression,
    UnmatchedCloseParen,
    UnsupportedFunction,
)
from ..core.logging import get_context_logger
from .ast import ASTNode, FunctionNode, OperandNode, OperatorNode
from .context import Associativity, Context
from .tokenizer import Function, Operand, Operator, OperatorKind, Token

logger = get_context_logger(__name__, stage="build")


class TreeBuilder:
    """
    Builds an AST from a token sequence.

    The builder respects:
    - Operator precedence and associativity (defined in context)
    - Parentheses
    - Function calls, with arguments built recursively
    """

    def __init__(self, context: Context | None = None):
        """
        Initialize builder with optional context.

        Args:
            context: Operator and function tables (defaults to Standard)
        """
        self.context = context or Context.standard()

    def build(self, tokens: list[Token]) -> ASTNode:
        """
        Build a tree from a top-level token sequence.

        Args:
            tokens: Tokens produced by the Tokenizer

        Returns:
            Root AST node

        Raises:
            UnmatchedCloseParen: If a ')' has no matching '('
            InsufficientOperands: If an operator is missing an operand
            MalformedExpression: If the tokens do not reduce to one tree
            UnsupportedFunction: If a function call has the wrong arity
        """
        root = self.build_sequence(tokens)
        logger.debug(
            "Built expression tree",
            extra_data={"nodes": root.size(), "depth": root.depth()},
        )
        return root

    def build_sequence(self, tokens: list[Token]) -> ASTNode:
        """Reduce a flat token sequence to a single tree."""
        operators: list[Operator] = []
        operands: list[ASTNode] = []

        for token in tokens:
            if isinstance(token, Operand):
                operands.append(OperandNode(token.value))

            elif isinstance(token, Function):
                operands.append(self.build_function(token))

            elif token.kind is OperatorKind.OPEN_PAREN:
                operators.append(token)

            elif token.kind is OperatorKind.CLOSE_PAREN:
                while operators and operators[-1].kind is not OperatorKind.OPEN_PAREN:
                    self._reduce(operators, operands)
                if not operators:
                    raise UnmatchedCloseParen(token.pos)
                operators.pop()

            else:
                while operators and self._reduces_before(operators[-1], token):
                    self._reduce(operators, operands)
                operators.append(token)

        while operators:
            if operators[-1].kind is OperatorKind.OPEN_PAREN:
                raise MalformedExpression(
                    "Opening parenthesis is never closed", "(", operators[-1].pos
                )
            self._reduce(operators, operands)

        if not operands:
            raise MalformedExpression("Empty expression")
        if len(operands) > 1:
            raise MalformedExpression(
                f"Expression reduces to {len(operands)} trees instead of one",
                details={"trees": len(operands)},
            )

        return operands[0]

    def build_function(self, token: Function) -> FunctionNode:
        """
        Build a function node from a Function token.

        Each argument is built independently; the first argument written is
        the first child.
        """
        args = [self.build_sequence(group) for group in self._split_arguments(token)]

        config = self.context.get_function(token.kind.value)
        if config is not None and config.arity is not None and len(args) != config.arity:
            raise UnsupportedFunction(
                token.kind.value,
                f"expected {config.arity} argument(s), got {len(args)}",
                token.pos,
            )

        return FunctionNode(token.kind, args)

    def _split_arguments(self, token: Function) -> list[list[Token]]:
        """
        Split a call's argument tokens into one sequence per argument.

        Arguments are separated where something that ends an operand is
        directly followed by something that starts one, at bracket depth 0:
        ``(2+1 3)`` holds the arguments ``2+1`` and ``3``.
        """
        tokens = token.arguments
        if not tokens:
            return []

        if not _is_bracket(tokens[0], OperatorKind.OPEN_PAREN) or not _closes(tokens):
            raise MalformedExpression(
                f"Arguments of '{token.kind.value}' are not enclosed in parentheses",
                token.kind.value,
                token.pos,
            )

        groups: list[list[Token]] = []
        depth = 0
        previous: Token | None = None
        for inner in tokens[1:-1]:
            if depth == 0 and (previous is None or (_ends_operand(previous) and _starts_operand(inner))):
                groups.append([])
            groups[-1].append(inner)
            if _is_bracket(inner, OperatorKind.OPEN_PAREN):
                depth += 1
            elif _is_bracket(inner, OperatorKind.CLOSE_PAREN):
                depth -= 1
            previous = inner

        return groups

    def _reduces_before(self, top: Operator, incoming: Operator) -> bool:
        """Check whether the stacked operator is reduced before ``incoming`` is pushed."""
        if top.kind is OperatorKind.OPEN_PAREN:
            return False

        top_prec = self.context.get_operator_precedence(top.kind.value)
        incoming_prec = self.context.get_operator_precedence(incoming.kind.value)

        assoc = self.context.get_operator_associativity(incoming.kind.value)
        if assoc == Associativity.RIGHT:
            return top_prec > incoming_prec
        return top_prec >= incoming_prec

    def _reduce(self, operators: list[Operator], operands: list[ASTNode]) -> None:
        """Pop one operator and its two operands, push the combined node."""
        op = operators.pop()
        if len(operands) < 2:
            raise InsufficientOperands(op.kind.value, op.pos)

        right = operands.pop()
        left = operands.pop()
        operands.append(OperatorNode(op.kind, left, right))


def _is_bracket(token: Token, kind: OperatorKind) -> bool:
    return isinstance(token, Operator) and token.kind is kind


def _ends_operand(token: Token) -> bool:
    return not isinstance(token, Operator) or token.kind is OperatorKind.CLOSE_PAREN


def _starts_operand(token: Token) -> bool:
    return not isinstance(token, Operator) or token.kind is OperatorKind.OPEN_PAREN


def _closes(tokens: list[Token]) -> bool:
    """Check that the bracket opened by ``tokens[0]`` is closed by the last token."""
    depth = 0
    for index, token in enumerate(tokens):
        if _is_bracket(token, OperatorKind.OPEN_PAREN):
            depth += 1
        elif _is_bracket(token, OperatorKind.CLOSE_PAREN):
            depth -= 1
        if depth == 0:
            return index == len(tokens) - 1
    return False
