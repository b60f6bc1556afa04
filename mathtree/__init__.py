"""mathtree - arithmetic expression trees.

Parses infix expressions with numbers, ``+ - * /``, parentheses and named
functions into an abstract syntax tree and evaluates it.

- mathtree.parser: Tokenizer, tree builder, AST and visitors
- mathtree.core: Settings, logging and the error hierarchy
- mathtree.pipeline: Calculator and one-call entry points
"""

from .core.errors import (
    BuildError,
    DivisionByZero,
    DomainError,
    EvalError,
    ExpressionError,
    InsufficientOperands,
    MalformedExpression,
    MalformedOperand,
    PipelineError,
    TokenizeError,
    UnknownFunction,
    UnmatchedCloseParen,
    UnsupportedFunction,
)
from .pipeline import Calculator, build_tree, compute_expression, evaluate, tokenize

__version__ = "0.1.0"

__all__ = [
    "Calculator",
    "tokenize",
    "build_tree",
    "evaluate",
    "compute_expression",
    "ExpressionError",
    "PipelineError",
    "TokenizeError",
    "MalformedOperand",
    "UnknownFunction",
    "BuildError",
    "UnmatchedCloseParen",
    "InsufficientOperands",
    "MalformedExpression",
    "EvalError",
    "DivisionByZero",
    "DomainError",
    "UnsupportedFunction",
]
