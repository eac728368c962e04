"""Test class ExpressionEvaluator."""
import math

import pytest

from arithmetic_calculator.common.errors import (
    DivisionByZeroError,
    EvaluationError,
    MalformedExpressionError,
    ModuloByZeroError,
)
from arithmetic_calculator.common.evaluator import ExpressionEvaluator
from arithmetic_calculator.common.tokens import NumberToken, Operator, OperatorToken


@pytest.fixture
def evaluator() -> ExpressionEvaluator:
    """Evaluator with the default division precision."""
    return ExpressionEvaluator()


def test_tokenize_basic():
    """Tokenize splits a displayed expression into typed tokens."""
    tokens = ExpressionEvaluator.tokenize("5 + 2 × 3")
    assert tokens == [
        NumberToken(text="5"),
        OperatorToken(op=Operator.ADD),
        NumberToken(text="2"),
        OperatorToken(op=Operator.MULTIPLY),
        NumberToken(text="3"),
    ]


def test_tokenize_negative_number():
    """A leading minus sign belongs to the number, not to an operator."""
    tokens = ExpressionEvaluator.tokenize("5 - -3")
    assert tokens[1] == OperatorToken(op=Operator.SUBTRACT)
    assert tokens[2] == NumberToken(text="-3")


@pytest.mark.parametrize("expr", ["5 ^ 2", "inf + 1", "nan", "1e5 + 1", "1_000 - 1"])
def test_tokenize_rejects_unknown_token(expr):
    """Tokens that are neither plain decimals nor operators raise ValueError."""
    with pytest.raises(ValueError):
        ExpressionEvaluator.tokenize(expr)


@pytest.mark.parametrize("expr,expected", [
    ("5 + 2 × 3", 11.0),  # tests precedence
    ("8 - 3 - 2", 3.0),  # tests left-associativity
    ("12 ÷ 4 ÷ 3", 1.0),
    ("2 × 3 % 4", 2.0),
    ("1 + 10 % 4 × 2", 5.0),
    ("10 - 4 + 1", 7.0),
    ("7 ÷ 2", 3.5),
    ("6 ÷ 3", 2.0),
    ("0 ÷ 5", 0.0),
    ("10 ÷ 3", 3.333333),
    ("2 ÷ 3", 0.666667),
    ("7 % 3", 1.0),
    ("-7 % 3", -1.0),
    ("7 % -3", 1.0),
    ("5 - -3", 8.0),
    ("42", 42.0),
    ("3.", 3.0),
])
def test_evaluate_valid(evaluator, expr, expected):
    """Evaluate returns the precedence-respecting, left-associative result."""
    assert evaluator.evaluate_text(expr) == expected


@pytest.mark.parametrize("expr", [
    "9" * 400 + " % 3",
    "1" + "0" * 308 + " × 10 % 3",
])
def test_modulo_of_infinite_dividend_is_nan(evaluator, expr):
    """An infinite dividend has no remainder: the result is nan, not an exception."""
    assert math.isnan(evaluator.evaluate_text(expr))


def test_modulo_by_infinite_divisor(evaluator):
    """A finite dividend modulo an infinite divisor is the dividend."""
    assert evaluator.evaluate_text("5 % " + "9" * 400) == 5.0


def test_integral_quotient_is_exact(evaluator):
    """An integral quotient is returned as is, without rounding."""
    assert evaluator.evaluate_text("6 ÷ 3").is_integer()
    assert evaluator.evaluate_text("123456789 ÷ 1") == 123456789.0


def test_division_precision_is_configurable():
    """Non-integral quotients are rounded to the configured number of decimals."""
    assert ExpressionEvaluator(division_precision=2).evaluate_text("10 ÷ 3") == 3.33


def test_division_precision_must_not_be_negative():
    """A negative precision is rejected."""
    with pytest.raises(ValueError):
        ExpressionEvaluator(division_precision=-1)


@pytest.mark.parametrize("expr,error", [
    ("5 ÷ 0", DivisionByZeroError),
    ("1 + 2 ÷ 0", DivisionByZeroError),
    ("5 ÷ -0", DivisionByZeroError),
    ("5 % 0", ModuloByZeroError),
    ("5 % 0 + 1", ModuloByZeroError),
])
def test_evaluate_zero_divisor(evaluator, expr, error):
    """A zero right-hand operand aborts the whole evaluation."""
    with pytest.raises(error):
        evaluator.evaluate_text(expr)


def test_zero_divisor_messages(evaluator):
    """Division and modulo failures carry distinct messages."""
    with pytest.raises(EvaluationError, match="Division by zero"):
        evaluator.evaluate_text("1 ÷ 0")
    with pytest.raises(EvaluationError, match="Modulo by zero is undefined"):
        evaluator.evaluate_text("1 % 0")


@pytest.mark.parametrize("expr", [
    "5 +",        # Trailing operator
    "+ 5",        # Leading operator
    "5 5",        # Missing operator
    "5 + ×",      # Two operators in a row
    "",           # Empty expression
])
def test_evaluate_malformed_expression(evaluator, expr):
    """Evaluate raises MalformedExpressionError for sequences that do not alternate."""
    with pytest.raises(MalformedExpressionError):
        evaluator.evaluate_text(expr)


@pytest.mark.parametrize("a,b,op,expected", [
    (2.0, 3.0, Operator.ADD, 5.0),
    (2.0, 3.0, Operator.SUBTRACT, -1.0),
    (2.0, 3.0, Operator.MULTIPLY, 6.0),
    (3.0, 2.0, Operator.DIVIDE, 1.5),
    (5.5, 2.0, Operator.MODULO, 1.5),
])
def test_apply(evaluator, a, b, op, expected):
    """apply computes a single binary operation."""
    assert evaluator.apply(a, b, op) == expected
