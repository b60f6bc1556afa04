"""
Expression exceptions.

Every stage of the pipeline reports failures with one of the exceptions
below. The hierarchy mirrors the stage that raised it so callers can catch
a whole stage (``TokenizeError``) or a single failure (``DivisionByZero``).
"""

from typing import Any, Dict, Optional


class ExpressionError(Exception):
    """Base exception for expression errors"""

    def __init__(
        self,
        message: str,
        text: Optional[str] = None,
        pos: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.text = text
        self.pos = pos
        self.details = details or {}
        super().__init__(self._format())

    def _format(self) -> str:
        if self.pos is not None:
            return f"{self.message} at position {self.pos}"
        return self.message

    @property
    def kind(self) -> str:
        """Name of the failure, e.g. ``DivisionByZero``"""
        return type(self).__name__

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "text": self.text,
            "pos": self.pos,
            "details": self.details,
        }


PipelineError = ExpressionError


# Tokenizer

class TokenizeError(ExpressionError):
    """Raised when the input cannot be split into tokens"""


class MalformedOperand(TokenizeError):
    """Raised when a literal does not parse as a number"""

    def __init__(self, text: str, pos: Optional[int] = None):
        super().__init__(
            message=f"The operand '{text}' has an invalid format",
            text=text,
            pos=pos,
        )


class UnknownFunction(TokenizeError):
    """Raised when an identifier is neither a number nor a known function"""

    def __init__(self, text: str, pos: Optional[int] = None):
        super().__init__(
            message=f"Unknown function '{text}'",
            text=text,
            pos=pos,
        )


# Tree builder

class BuildError(ExpressionError):
    """Raised when a token sequence does not form a valid tree"""


class UnmatchedCloseParen(BuildError):
    """Raised when a ')' has no matching '('"""

    def __init__(self, pos: Optional[int] = None):
        super().__init__(
            message="Closing parenthesis has no matching opening parenthesis",
            text=")",
            pos=pos,
        )


class InsufficientOperands(BuildError):
    """Raised when an operator has fewer than two operands"""

    def __init__(self, operator: str, pos: Optional[int] = None):
        super().__init__(
            message=f"Operator '{operator}' is missing an operand",
            text=operator,
            pos=pos,
        )


class MalformedExpression(BuildError):
    """Raised when tokens do not reduce to exactly one tree"""


# Evaluator

class EvalError(ExpressionError):
    """Raised when a tree cannot be evaluated"""


class DivisionByZero(EvalError):
    """Raised when a divisor is indistinguishable from zero"""

    def __init__(self, divisor: float):
        super().__init__(
            message="Division by zero",
            text=repr(divisor),
            details={"divisor": divisor},
        )


class DomainError(EvalError):
    """Raised when a function argument is outside its domain"""

    def __init__(self, function: str, args: list[float], reason: str = "math domain error"):
        super().__init__(
            message=f"{function}{tuple(args)}: {reason}",
            text=function,
            details={"function": function, "args": list(args)},
        )


class UnsupportedFunction(BuildError, EvalError):
    """
    Raised for a function that cannot be applied.

    The builder raises it when a call has the wrong number of arguments, the
    evaluator when the function has no implementation.
    """

    def __init__(self, function: str, reason: str, pos: Optional[int] = None):
        super().__init__(
            message=f"Unsupported function '{function}': {reason}",
            text=function,
            pos=pos,
            details={"function": function},
        )
