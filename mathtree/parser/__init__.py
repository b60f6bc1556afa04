"""
Expression parser package.

Tokenization, tree building and tree visitors for arithmetic expressions.
"""

from .ast import ASTNode, ASTVisitor, FunctionNode, OperandNode, OperatorNode
from .builder import TreeBuilder
from .context import Associativity, Context, FunctionConfig, OperatorConfig
from .tokenizer import (
    Function,
    FunctionKind,
    Operand,
    Operator,
    OperatorKind,
    Token,
    Tokenizer,
    parse_number,
)
from .visitors import EvalVisitor, StringVisitor

__all__ = [
    "ASTNode",
    "ASTVisitor",
    "OperandNode",
    "OperatorNode",
    "FunctionNode",
    "TreeBuilder",
    "Associativity",
    "Context",
    "FunctionConfig",
    "OperatorConfig",
    "Token",
    "Operand",
    "Operator",
    "Function",
    "OperatorKind",
    "FunctionKind",
    "Tokenizer",
    "parse_number",
    "EvalVisitor",
    "StringVisitor",
]
