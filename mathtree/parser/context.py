"""
Context system for expression parsing.

A context defines the environment an expression is read and evaluated in:
- Operator precedence and associativity
- Available functions, their arity and implementation
- Token separator characters
- The epsilon used to detect division by zero
- Flags such as nested function support
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import yaml

if TYPE_CHECKING:
    from ..core.config import Settings


class Associativity(Enum):
    """Operator associativity."""

    LEFT = "left"
    RIGHT = "right"


@dataclass
class OperatorConfig:
    """Configuration for a binary operator."""

    symbol: str
    precedence: int
    associativity: Associativity = Associativity.LEFT


@dataclass
class FunctionConfig:
    """
    Configuration for a function.

    ``arity`` of None means the function is recognised but takes no fixed
    number of arguments; ``evaluator`` of None means it is not implemented.
    """

    name: str
    arity: int | None = 1
    evaluator: Callable[..., float] | None = None


# Implementations available to any context, bound by name.
BUILTIN_FUNCTIONS: dict[str, tuple[int, Callable[..., float]]] = {
    "sin": (1, math.sin),
    "cos": (1, math.cos),
    "tan": (1, math.tan),
    "sqrt": (1, math.sqrt),
    "ln": (1, math.log),
    "pow": (2, math.pow),
    "abs": (1, math.fabs),
}

# Names the tokenizer accepts but no context implements.
RESERVED_FUNCTIONS = ("area", "perimeter", "x", "y", "z")

DEFAULT_SEPARATORS = " \t\r\n,"


@dataclass
class Context:
    """
    Parsing and evaluation environment.

    Attributes:
        name: Context name (e.g., "Standard")
        operators: Binary operators keyed by symbol
        functions: Functions keyed by lower-case name
        separators: Characters that end a literal without producing a token
        epsilon: Divisors with a smaller magnitude count as zero
        flags: Additional flags (``nested_functions``)
    """

    name: str
    operators: dict[str, OperatorConfig] = field(default_factory=dict)
    functions: dict[str, FunctionConfig] = field(default_factory=dict)
    separators: str = DEFAULT_SEPARATORS
    epsilon: float = sys.float_info.epsilon
    flags: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def standard(cls) -> "Context":
        """
        Create the standard context.

        Four left-associative operators (``*`` and ``/`` bind tighter than
        ``+`` and ``-``), every built-in function, and the reserved function
        names with no implementation.
        """
        context = cls(name="Standard")

        context.operators = {
            "+": OperatorConfig("+", precedence=1),
            "-": OperatorConfig("-", precedence=1),
            "*": OperatorConfig("*", precedence=2),
            "/": OperatorConfig("/", precedence=2),
        }

        for name, (arity, func) in BUILTIN_FUNCTIONS.items():
            context.functions[name] = FunctionConfig(name, arity=arity, evaluator=func)

        for name in RESERVED_FUNCTIONS:
            context.functions[name] = FunctionConfig(name, arity=None)

        context.flags["nested_functions"] = True

        return context

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Context":
        """
        Load context from YAML file.

        Keys missing from the file keep the values of the standard context.
        Functions listed by name are bound to the built-in implementation of
        the same name; unknown names are kept as unimplemented.

        Args:
            path: Path to YAML configuration file

        Returns:
            Context instance
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        context = cls.standard()
        context.name = data.get("name", context.name)

        if "operators" in data:
            operators = {}
            for op_data in data["operators"]:
                symbol = op_data["symbol"]
                operators[symbol] = OperatorConfig(
                    symbol=symbol,
                    precedence=op_data["precedence"],
                    associativity=Associativity(op_data.get("associativity", "left")),
                )
            context.operators = operators

        if "functions" in data:
            functions = {}
            for func_data in data["functions"]:
                if isinstance(func_data, str):
                    func_data = {"name": func_data}
                name = func_data["name"].lower()
                arity, func = BUILTIN_FUNCTIONS.get(name, (None, None))
                functions[name] = FunctionConfig(
                    name=name,
                    arity=func_data.get("arity", arity),
                    evaluator=func,
                )
            context.functions = functions

        if "separators" in data:
            context.separators = data["separators"]

        if "epsilon" in data:
            context.epsilon = float(data["epsilon"])

        context.flags.update(data.get("flags", {}))

        return context

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Context":
        """Create the context described by library settings."""
        if settings.CONTEXT_FILE:
            context = cls.from_yaml(settings.CONTEXT_FILE)
        else:
            context = cls.standard()
        context.set_flag("nested_functions", settings.NESTED_FUNCTIONS)
        return context

    def get_flag(self, flag_name: str, default: Any = None) -> Any:
        """Get a context flag value."""
        return self.flags.get(flag_name, default)

    def set_flag(self, flag_name: str, value: Any) -> None:
        """Set a context flag."""
        self.flags[flag_name] = value

    def get_operator_precedence(self, op: str) -> int:
        """
        Get the precedence of an operator.

        Args:
            op: Operator symbol

        Returns:
            Precedence value (higher = binds tighter), 0 if unknown
        """
        if op in self.operators:
            return self.operators[op].precedence
        return 0

    def get_operator_associativity(self, op: str) -> Associativity:
        """Get the associativity of an operator."""
        if op in self.operators:
            return self.operators[op].associativity
        return Associativity.LEFT

    def is_separator(self, char: str) -> bool:
        return char in self.separators

    def is_function(self, name: str) -> bool:
        """Check if name is a function in this context."""
        return name.lower() in self.functions

    def get_function(self, name: str) -> FunctionConfig | None:
        return self.functions.get(name.lower())
