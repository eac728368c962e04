"""Test token models and number formatting."""
from pydantic import ValidationError
import pytest

from arithmetic_calculator.common.tokens import NumberToken, Operator, OperatorToken, format_number


@pytest.mark.parametrize("value,expected", [
    (2.0, "2"),
    (-15.0, "-15"),
    (-0.0, "0"),
    (3.5, "3.5"),
    (0.1 + 0.2, "0.30000000000000004"),
    (float("inf"), "inf"),
    (float("-inf"), "-inf"),
    (float("nan"), "nan"),
    (1e16, "10000000000000000"),
    (1e-05 * 1e-05, "0.00000000010000000000000002"),
    (-2.5e-7, "-0.00000025"),
])
def test_format_number(value, expected):
    """format_number drops the fractional part of integral values only."""
    assert format_number(value) == expected


@pytest.mark.parametrize("symbol,expected", [
    ("+", Operator.ADD),
    ("-", Operator.SUBTRACT),
    ("×", Operator.MULTIPLY),
    ("*", Operator.MULTIPLY),
    ("÷", Operator.DIVIDE),
    ("/", Operator.DIVIDE),
    ("%", Operator.MODULO),
])
def test_operator_from_symbol(symbol, expected):
    """from_symbol accepts display symbols and ASCII aliases."""
    assert Operator.from_symbol(symbol) is expected


@pytest.mark.parametrize("symbol", ["^", "x", "", "++"])
def test_operator_from_symbol_invalid(symbol):
    """from_symbol rejects anything outside the five operators."""
    with pytest.raises(ValueError):
        Operator.from_symbol(symbol)


def test_operator_precedence():
    """Multiplicative operators bind tighter than additive ones."""
    assert Operator.ADD.precedence == Operator.SUBTRACT.precedence == 1
    assert Operator.MULTIPLY.precedence == Operator.DIVIDE.precedence == Operator.MODULO.precedence == 2


def test_number_token_keeps_typed_text():
    """A number under construction keeps its trailing point."""
    token = NumberToken(text="3.")
    assert str(token) == "3."
    assert token.value == 3.0


def test_number_token_from_value():
    """from_value stores the canonical text of a computed value."""
    assert NumberToken.from_value(6.0).text == "6"


def test_number_token_rejects_non_numeric_text():
    """Non-numeric text raises a validation error."""
    with pytest.raises(ValidationError):
        NumberToken(text="-")


def test_operator_token_str():
    """Operator tokens render as their symbol."""
    assert str(OperatorToken(op=Operator.DIVIDE)) == "÷"


@pytest.mark.parametrize("text", ["1e5", "1_000", "+5", "5-", "1.2.3", " 5", "infinity", "-nan"])
def test_number_token_rejects_non_decimal_text(text):
    """Only plain decimals and the inf/nan result texts are numbers."""
    with pytest.raises(ValidationError):
        NumberToken(text=text)


@pytest.mark.parametrize("text,editable", [
    ("12", True),
    ("-3.", True),
    (".5", True),
    ("inf", False),
    ("-inf", False),
    ("nan", False),
])
def test_number_token_editable(text, editable):
    """inf and nan results cannot be extended by typing."""
    assert NumberToken(text=text).editable is editable
