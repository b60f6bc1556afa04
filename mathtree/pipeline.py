"""
Expression pipeline.

Chains Tokenizer → TreeBuilder → EvalVisitor. Each stage raises its own
ExpressionError subclass and the pipeline stops at the first one.
"""

from .core.config import get_settings
from .core.errors import ExpressionError
from .core.logging import get_context_logger
from .parser.ast import ASTNode
from .parser.builder import TreeBuilder
from .parser.context import Context
from .parser.tokenizer import Token, Tokenizer
from .parser.visitors import EvalVisitor, StringVisitor

logger = get_context_logger(__name__, stage="pipeline")


class Calculator:
    """
    Tokenizes, builds and evaluates expressions under one context.

    Without an explicit context the calculator reads it from the library
    settings (``MATHTREE_CONTEXT_FILE``, ``MATHTREE_NESTED_FUNCTIONS``).

    Example:
        >>> Calculator().compute("3 + 5 * (2 - 8)")
        -27.0
    """

    def __init__(self, context: Context | None = None):
        self.context = context or Context.from_settings(get_settings())
        self.tokenizer = Tokenizer(self.context)
        self.builder = TreeBuilder(self.context)
        self.evaluator = EvalVisitor(self.context)

    def tokenize(self, expression: str) -> list[Token]:
        return self.tokenizer.tokenize(expression)

    def build_tree(self, tokens: list[Token]) -> ASTNode:
        return self.builder.build(tokens)

    def evaluate(self, node: ASTNode) -> float:
        return self.evaluator.evaluate(node)

    def parse(self, expression: str) -> ASTNode:
        """Tokenize and build, without evaluating."""
        return self.build_tree(self.tokenize(expression))

    def render(self, node: ASTNode) -> str:
        return node.accept(StringVisitor(self.context))

    def compute(self, expression: str) -> float:
        """
        Evaluate an expression string.

        Args:
            expression: Infix expression, e.g. "2*(3+4)+5"

        Returns:
            The numeric result

        Raises:
            ExpressionError: The first failure of any stage
        """
        try:
            result = self.evaluate(self.parse(expression))
        except ExpressionError as e:
            logger.info(
                "Expression failed",
                extra_data={"expression": expression, "error": e.kind, "pos": e.pos},
            )
            raise

        logger.debug(
            "Computed expression",
            extra_data={"expression": expression, "result": result},
        )
        return result


def tokenize(expression: str, context: Context | None = None) -> list[Token]:
    """Split an expression into tokens."""
    return Tokenizer(context).tokenize(expression)


def build_tree(tokens: list[Token], context: Context | None = None) -> ASTNode:
    """Build a tree from tokens."""
    return TreeBuilder(context).build(tokens)


def evaluate(node: ASTNode, context: Context | None = None) -> float:
    """Evaluate a tree."""
    return EvalVisitor(context).evaluate(node)


def compute_expression(expression: str, context: Context | None = None) -> float:
    """Tokenize, build and evaluate an expression in one call."""
    return Calculator(context).compute(expression)
