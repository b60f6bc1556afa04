"""
Tokenizer for arithmetic expressions.

The input is scanned one character at a time. Characters that are neither
separators nor operators accumulate into a literal, which is classified as a
function name or a number when the next separator or operator ends it.

Function calls are captured as a single ``Function`` token whose
``arguments`` hold the flat tokens between its parentheses, brackets
included. Calls may nest: ``sin(cos(0))`` yields a ``Function`` token inside
the arguments of another.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from ..core.errors import MalformedOperand, UnknownFunction
from ..core.logging import get_context_logger
from .context import Context

logger = get_context_logger(__name__, stage="tokenize")


class OperatorKind(Enum):
    """Operator and bracket characters."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"

    @property
    def is_bracket(self) -> bool:
        return self in (OperatorKind.OPEN_PAREN, OperatorKind.CLOSE_PAREN)


class FunctionKind(Enum):
    """Function names recognised by the tokenizer."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    SQRT = "sqrt"
    LN = "ln"
    POW = "pow"
    ABS = "abs"
    # Reserved, no implementation
    AREA = "area"
    PERIMETER = "perimeter"
    X = "x"
    Y = "y"
    Z = "z"

    @classmethod
    def lookup(cls, name: str) -> "FunctionKind | None":
        """Find a kind by case-insensitive name."""
        try:
            return cls(name.lower())
        except ValueError:
            return None


@dataclass
class Operand:
    """A numeric literal."""

    value: float
    pos: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Operand({self.value})"


@dataclass
class Operator:
    """An operator or bracket."""

    kind: OperatorKind
    pos: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        return f"Operator('{self.kind.value}')"


@dataclass
class Function:
    """
    A function call.

    Attributes:
        kind: The function
        arguments: Tokens between the call's parentheses, both included
        pos: Position of the function name in the source string
    """

    kind: FunctionKind
    arguments: list["Token"] = field(default_factory=list)
    pos: int = field(default=0, compare=False)

    def __repr__(self) -> str:
        args_repr = ", ".join(repr(arg) for arg in self.arguments)
        return f"Function('{self.kind.value}', [{args_repr}])"


Token = Union[Operand, Operator, Function]

OPERATOR_CHARS = {kind.value: kind for kind in OperatorKind}

NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)")
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_]")


def parse_number(raw: str, pos: int = 0) -> float:
    """
    Parse a numeric literal.

    Accepts digits with at most one decimal point and an optional leading
    sign, independent of locale.

    Raises:
        UnknownFunction: If the text looks like an identifier
        MalformedOperand: For anything else, including literals too large for a float
    """
    if NUMBER_PATTERN.fullmatch(raw):
        value = float(raw)
        if not math.isfinite(value):
            raise MalformedOperand(raw, pos)
        return value
    if IDENTIFIER_PATTERN.match(raw):
        raise UnknownFunction(raw, pos)
    raise MalformedOperand(raw, pos)


@dataclass
class _Call:
    """A function call whose closing parenthesis has not been seen yet."""

    function: Function
    depth: int = 0

    @property
    def opened(self) -> bool:
        return self.depth > 0


class _Scan:
    """State for tokenizing a single expression."""

    def __init__(self, context: Context):
        self.context = context
        self.tokens: list[Token] = []
        self.calls: list[_Call] = []
        self.buffer: list[str] = []
        self.start = 0

    def feed(self, char: str, pos: int) -> None:
        if self.context.is_separator(char):
            self.flush()
        elif char in OPERATOR_CHARS:
            self.flush()
            self.emit(Operator(OPERATOR_CHARS[char], pos))
        else:
            if not self.buffer:
                self.start = pos
            self.buffer.append(char)

    def flush(self) -> None:
        """Turn the pending literal into a token."""
        if not self.buffer:
            return

        raw = "".join(self.buffer)
        self.buffer.clear()

        kind = FunctionKind.lookup(raw)
        if kind is None:
            self.emit(Operand(parse_number(raw, self.start), self.start))
            return

        if self.calls and not self.context.get_flag("nested_functions", True):
            raise MalformedOperand(raw, self.start)

        function = Function(kind, pos=self.start)
        self.emit(function)
        self.calls.append(_Call(function))

    def emit(self, token: Token) -> None:
        """Append a token to the innermost open call, or the top level."""
        if self.calls and not self.calls[-1].opened:
            if isinstance(token, Operator) and token.kind is OperatorKind.OPEN_PAREN:
                call = self.calls[-1]
                call.function.arguments.append(token)
                call.depth = 1
                return
            # Name not followed by '(': the call has no arguments.
            self.calls.pop()

        if not self.calls:
            self.tokens.append(token)
            return

        call = self.calls[-1]
        call.function.arguments.append(token)
        if isinstance(token, Operator):
            if token.kind is OperatorKind.OPEN_PAREN:
                call.depth += 1
            elif token.kind is OperatorKind.CLOSE_PAREN:
                call.depth -= 1
                if call.depth == 0:
                    self.calls.pop()

    def finish(self) -> list[Token]:
        self.flush()
        return self.tokens


class Tokenizer:
    """
    Splits expressions into Operand, Operator and Function tokens.

    A tokenizer holds no per-expression state and can be reused.
    """

    def __init__(self, context: Context | None = None):
        """
        Initialize tokenizer with optional context.

        Args:
            context: Defines separators and nesting support (defaults to Standard)
        """
        self.context = context or Context.standard()

    def tokenize(self, expression: str) -> list[Token]:
        """
        Tokenize an arithmetic expression.

        Args:
            expression: The expression to tokenize

        Returns:
            Top-level token sequence

        Raises:
            MalformedOperand: If a literal is not a valid number
            UnknownFunction: If an identifier is not a known function
        """
        scan = _Scan(self.context)
        for pos, char in enumerate(expression):
            scan.feed(char, pos)
        tokens = scan.finish()

        logger.debug(
            "Tokenized expression",
            extra_data={"expression": expression, "tokens": len(tokens)},
        )
        return tokens
