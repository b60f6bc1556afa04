"""Tests for the operator-precedence tree builder."""

import pytest

from mathtree.core.errors import (
    BuildError,
    InsufficientOperands,
    MalformedExpression,
    UnmatchedCloseParen,
    UnsupportedFunction,
)
from mathtree.parser import (
    Associativity,
    Context,
    Function,
    FunctionKind,
    FunctionNode,
    Operand,
    OperandNode,
    Operator,
    OperatorConfig,
    OperatorKind,
    OperatorNode,
    TreeBuilder,
)


def num(value):
    return OperandNode(value)


def op(symbol, left, right):
    return OperatorNode(OperatorKind(symbol), left, right)


class TestPrecedence:
    """Test precedence and associativity."""

    def test_single_operand(self, parse):
        """Test that a lone number is a leaf."""
        assert parse("7") == num(7)

    def test_multiplication_binds_tighter(self, parse):
        """Test that * is reduced before +."""
        assert parse("1+2*3") == op("+", num(1), op("*", num(2), num(3)))
        assert parse("1*2+3") == op("+", op("*", num(1), num(2)), num(3))

    def test_left_associative_subtraction(self, parse):
        """Test that ties reduce the earlier operator first."""
        assert parse("8-3-2") == op("-", op("-", num(8), num(3)), num(2))

    def test_left_associative_division(self, parse):
        """Test that a/b/c is (a/b)/c."""
        assert parse("8/4/2") == op("/", op("/", num(8), num(4)), num(2))

    def test_left_child_is_written_first(self, parse):
        """Test the operand order of a single operation."""
        tree = parse("2-5")
        assert tree.left == num(2)
        assert tree.right == num(5)
        assert tree.children == [num(2), num(5)]

    def test_parentheses_override_precedence(self, parse):
        """Test that brackets bound reduction."""
        assert parse("2*(3+4)+5") == op(
            "+", op("*", num(2), op("+", num(3), num(4))), num(5)
        )

    def test_redundant_parentheses(self, parse):
        """Test that extra brackets do not change the tree."""
        assert parse("((2))") == num(2)
        assert parse("(1+2)") == parse("1+2")

    def test_right_associative_operator_from_context(self):
        """Test that associativity comes from the context."""
        context = Context.standard()
        context.operators["-"] = OperatorConfig("-", 1, Associativity.RIGHT)
        builder = TreeBuilder(context)
        tokens = [
            Operand(8), Operator(OperatorKind.SUB), Operand(3),
            Operator(OperatorKind.SUB), Operand(2),
        ]
        assert builder.build(tokens) == op("-", num(8), op("-", num(3), num(2)))


class TestFunctions:
    """Test function call nodes."""

    def test_single_argument(self, parse):
        """Test that the call's argument becomes its child."""
        assert parse("sqrt(4+5)") == FunctionNode(
            FunctionKind.SQRT, [op("+", num(4), num(5))]
        )

    def test_function_in_expression(self, parse):
        """Test that a call behaves as an operand."""
        assert parse("2*abs(3)") == op("*", num(2), FunctionNode(FunctionKind.ABS, [num(3)]))

    def test_two_arguments_in_order(self, parse):
        """Test that pow's first written argument is its first child."""
        expected = FunctionNode(FunctionKind.POW, [num(2), num(10)])
        assert parse("pow(2 10)") == expected
        assert parse("pow(2, 10)") == expected

    def test_compound_arguments(self, parse):
        """Test that arguments split where one operand follows another."""
        tree = parse("pow((1+1) 2*3)")
        assert tree == FunctionNode(
            FunctionKind.POW, [op("+", num(1), num(1)), op("*", num(2), num(3))]
        )

    def test_nested_calls(self, parse):
        """Test that a call can be another call's argument."""
        assert parse("sin(cos(0))") == FunctionNode(
            FunctionKind.SIN, [FunctionNode(FunctionKind.COS, [num(0)])]
        )

    def test_reserved_function_builds(self, parse):
        """Test that reserved functions have no arity check when built."""
        assert parse("area(1 2 3)") == FunctionNode(FunctionKind.AREA, [num(1), num(2), num(3)])

    def test_wrong_arity(self, parse):
        """Test that a call with too many or too few arguments fails."""
        with pytest.raises(UnsupportedFunction) as exc_info:
            parse("sin(1 2)")
        assert exc_info.value.text == "sin"

        with pytest.raises(UnsupportedFunction):
            parse("pow(2)")

    def test_missing_arguments(self, parse):
        """Test that a name without a call fails on arity."""
        with pytest.raises(UnsupportedFunction):
            parse("abs + 1")
        with pytest.raises(UnsupportedFunction):
            parse("sqrt()")

    def test_unclosed_call(self, parse):
        """Test that a call without its ')' fails."""
        with pytest.raises(MalformedExpression):
            parse("sqrt(4")

    def test_arguments_not_in_brackets(self, builder):
        """Test that hand-built calls need bracketed arguments."""
        token = Function(FunctionKind.ABS, [Operand(1)])
        with pytest.raises(MalformedExpression):
            builder.build([token])


class TestBuildErrors:
    """Test builder failures."""

    def test_unmatched_close_paren(self, parse):
        """Test that a stray ')' is a hard error."""
        with pytest.raises(UnmatchedCloseParen) as exc_info:
            parse("2+3)")
        assert exc_info.value.pos == 3

    def test_unclosed_open_paren(self, parse):
        """Test that a '(' left open fails."""
        with pytest.raises(MalformedExpression) as exc_info:
            parse("(2+3")
        assert exc_info.value.pos == 0

    def test_missing_operand(self, parse):
        """Test that a dangling operator fails."""
        with pytest.raises(InsufficientOperands) as exc_info:
            parse("2+")
        assert exc_info.value.text == "+"

    def test_leading_operator(self, parse):
        """Test that unary minus is not supported."""
        with pytest.raises(InsufficientOperands):
            parse("-5")

    def test_two_operands_without_operator(self, parse):
        """Test that juxtaposed numbers do not reduce to one tree."""
        with pytest.raises(MalformedExpression) as exc_info:
            parse("2 3")
        assert exc_info.value.details == {"trees": 2}

    @pytest.mark.parametrize("expression", ["", "()", "   "])
    def test_empty(self, parse, expression):
        """Test that nothing to build is an error."""
        with pytest.raises(MalformedExpression):
            parse(expression)

    def test_errors_share_base(self, parse):
        """Test that every builder failure is a BuildError."""
        for expression in ("2+3)", "(2", "*", "1 2", "sin(1 2)"):
            with pytest.raises(BuildError):
                parse(expression)


class TestTreeShape:
    """Test node helpers."""

    def test_size_and_depth(self, parse):
        """Test node counting on a known tree."""
        tree = parse("2*(3+4)+5")
        assert tree.size() == 7
        assert tree.depth() == 4

    def test_operator_node_rejects_brackets(self):
        """Test that brackets never become tree nodes."""
        with pytest.raises(ValueError):
            OperatorNode(OperatorKind.OPEN_PAREN, num(1), num(2))
