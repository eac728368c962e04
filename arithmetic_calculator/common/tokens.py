"""Pydantic models for the tokens of a calculator expression."""
from decimal import Decimal
from enum import Enum
import math
import re
from typing import Dict, FrozenSet, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Operator(str, Enum):
    """The five binary operators a calculator expression may contain."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    MODULO = "%"

    @property
    def precedence(self) -> int:
        """Binding strength of the operator: 1 for additive, 2 for multiplicative."""
        return PRECEDENCE[self]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Operator":
        """
        Look up an operator by its display symbol or its ASCII alias.

        :param str symbol: One of ``+ - × ÷ %`` or the aliases ``*`` and ``/``

        :return: Matching operator
        :rtype: Operator
        :raises ValueError: If the symbol is not a supported operator
        """
        symbol = ASCII_ALIASES.get(symbol, symbol)
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Unsupported operator: {symbol!r}") from None


# Mapping of operators to their precedence
PRECEDENCE: Dict[Operator, int] = {
    Operator.ADD: 1,
    Operator.SUBTRACT: 1,
    Operator.MULTIPLY: 2,
    Operator.DIVIDE: 2,
    Operator.MODULO: 2,
}

ASCII_ALIASES: Dict[str, str] = {
    "*": Operator.MULTIPLY.value,
    "/": Operator.DIVIDE.value,
}


# Text the user can type: optional sign, digits, at most one point
DECIMAL_PATTERN = re.compile(r"-?([0-9]+(\.[0-9]*)?|\.[0-9]+)")

# Text of results that are not finite, they can be shown but not edited
NON_FINITE_TEXTS: FrozenSet[str] = frozenset({"inf", "-inf", "nan"})


def is_decimal(text: str) -> bool:
    """True if text is a plain decimal number such as "12", "-3." or "0.25"."""
    return DECIMAL_PATTERN.fullmatch(text) is not None


def format_number(value: float) -> str:
    """
    Render a computed number in canonical decimal text.

    Finite values are written in plain positional notation, never with an exponent,
    using the shortest digits that round-trip to the same float. Trailing zeros and
    a trailing point are dropped (``2`` rather than ``2.0``). Non-finite values are
    rendered as ``inf``, ``-inf`` or ``nan``.

    :param float value: Number to render

    :return: Canonical text of the number
    :rtype: str
    """
    if not math.isfinite(value):
        return "nan" if math.isnan(value) else repr(value)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    # Negative zero is shown as plain zero
    return "0" if text == "-0" else text


class NumberToken(BaseModel):
    """A numeric literal, kept as the text the user typed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    text: str = Field(..., description="Decimal text of the number, e.g. '3.' while typing")

    @field_validator("text")
    def text_must_be_decimal(cls, v: str) -> str:
        """Ensure the text is a plain decimal, or the text of a non-finite result."""
        if not is_decimal(v) and v not in NON_FINITE_TEXTS:
            raise ValueError(f"Not a number: {v!r}")
        return v

    @classmethod
    def from_value(cls, value: float) -> "NumberToken":
        """Build a token holding the canonical text of a computed value."""
        return cls(text=format_number(value))

    @property
    def value(self) -> float:
        """Numeric value of the literal."""
        return float(self.text)

    @property
    def editable(self) -> bool:
        """False for inf and nan results, which digits cannot extend."""
        return is_decimal(self.text)

    def __str__(self) -> str:
        return self.text


class OperatorToken(BaseModel):
    """One of the five binary operators."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"
    op: Operator = Field(..., description="Operator symbol")

    def __str__(self) -> str:
        return self.op.value


Token = Union[NumberToken, OperatorToken]
