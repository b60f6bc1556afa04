"""Tests for the expression error hierarchy."""

import pytest

from mathtree.core.errors import (
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


class TestHierarchy:
    """Test which stage each error belongs to."""

    @pytest.mark.parametrize(
        "error, base",
        [
            (MalformedOperand("1.2.3"), TokenizeError),
            (UnknownFunction("foo"), TokenizeError),
            (UnmatchedCloseParen(3), BuildError),
            (InsufficientOperands("+"), BuildError),
            (MalformedExpression("Empty expression"), BuildError),
            (DivisionByZero(0.0), EvalError),
            (DomainError("sqrt", [-1.0]), EvalError),
        ],
    )
    def test_stage_base(self, error, base):
        """Test that each error derives from its stage and the common base."""
        assert isinstance(error, base)
        assert isinstance(error, ExpressionError)

    def test_unsupported_function_in_both_stages(self):
        """Test that arity and implementation failures share one class."""
        error = UnsupportedFunction("area", "not implemented")
        assert isinstance(error, BuildError)
        assert isinstance(error, EvalError)

    def test_pipeline_error_alias(self):
        """Test that PipelineError catches every failure."""
        assert PipelineError is ExpressionError


class TestErrorDetails:
    """Test error attributes."""

    def test_message_with_position(self):
        """Test that the position is part of the message."""
        error = MalformedOperand("1.2.3", pos=5)
        assert str(error) == "The operand '1.2.3' has an invalid format at position 5"
        assert error.text == "1.2.3"

    def test_message_without_position(self):
        """Test messages for errors with no source position."""
        assert str(DivisionByZero(0.0)) == "Division by zero"

    def test_to_dict(self):
        """Test the serialisable form."""
        error = UnknownFunction("foo", pos=2)
        assert error.to_dict() == {
            "kind": "UnknownFunction",
            "message": "Unknown function 'foo'",
            "text": "foo",
            "pos": 2,
            "details": {},
        }

    def test_domain_error_details(self):
        """Test that the function and its arguments are kept."""
        error = DomainError("ln", [0.0])
        assert error.details == {"function": "ln", "args": [0.0]}
        assert error.kind == "DomainError"
