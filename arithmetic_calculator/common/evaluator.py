"""Evaluate calculator expressions with operator precedence."""
import math
from typing import List, Sequence

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_calculator.common.errors import (
    DivisionByZeroError,
    MalformedExpressionError,
    ModuloByZeroError,
)
from arithmetic_calculator.common.tokens import NumberToken, Operator, OperatorToken, Token, is_decimal


class ExpressionEvaluator(BaseModel):
    """
    Evaluate flat infix expressions made of numbers and the five calculator operators.

    Design constraints:
        - No eval(), no dynamic code execution
        - A failure at any step aborts the whole evaluation, no partial result is returned

    Algorithm (two-stack precedence reduction, a.k.a. Shunting-yard without an output queue):
        1. Numbers are pushed onto a value stack
        2. Before an operator is pushed, every stacked operator with higher or equal precedence is reduced
        3. Remaining operators are reduced once all tokens are consumed

    Reducing pops two values, applies the operator and pushes the result back.
    Reducing on equal precedence makes operators left-associative: 8 - 3 - 2 is (8 - 3) - 2.

    Examples:
        - 5 + 2 × 3 = 11
        - 7 ÷ 2 = 3.5
    """

    model_config = ConfigDict(frozen=True)

    division_precision: int = Field(
        default=6, ge=0, description="Decimal places kept for non-integral quotients"
    )

    @staticmethod
    def tokenize(expr: str) -> List[Token]:
        """
        Split a displayed expression into tokens.

        Tokens must be space-separated (e.g., "5 + 2 × 3"); ``*`` and ``/`` are accepted for ``×`` and ``÷``.

        :param str expr: Expression as shown on the display

        :return: List of tokens
        :rtype: List[Token]
        :raises ValueError: If a token is neither a number nor an operator
        """
        tokens: List[Token] = []
        for part in expr.split():
            if ExpressionEvaluator._is_number(part):
                tokens.append(NumberToken(text=part))
            else:
                tokens.append(OperatorToken(op=Operator.from_symbol(part)))
        return tokens

    @staticmethod
    def _is_number(token: str) -> bool:
        """
        Determine if a text token is a plain decimal number.

        Exponents, digit separators, inf and nan are not numbers a calculator can type.

        :param str token: Token string

        :return: True if token is a decimal such as "12", "-3." or "0.25", else False
        :rtype: bool
        """
        return is_decimal(token)

    @staticmethod
    def _check_well_formed(tokens: Sequence[Token]) -> None:
        """
        Ensure tokens alternate number, operator, number and end on a number.

        :param Sequence[Token] tokens: Tokens to check

        :raises MalformedExpressionError: If the sequence is empty or does not alternate
        """
        if not tokens:
            raise MalformedExpressionError("Empty expression")
        for position, token in enumerate(tokens):
            expected = NumberToken if position % 2 == 0 else OperatorToken
            if not isinstance(token, expected):
                raise MalformedExpressionError(
                    f"Expected a {expected.__name__} at position {position}, got {token}"
                )
        if isinstance(tokens[-1], OperatorToken):
            raise MalformedExpressionError("Expression cannot end with an operator")

    def apply(self, a: float, b: float, op: Operator) -> float:
        """
        Apply a single operator to two operands.

        :param float a: Left-hand operand
        :param float b: Right-hand operand
        :param Operator op: Operator to apply

        :return: Result of ``a op b``
        :rtype: float
        :raises DivisionByZeroError: If dividing by zero
        :raises ModuloByZeroError: If taking a remainder by zero
        """
        match op:
            case Operator.ADD:
                return a + b
            case Operator.SUBTRACT:
                return a - b
            case Operator.MULTIPLY:
                return a * b
            case Operator.DIVIDE:
                if b == 0:
                    raise DivisionByZeroError()
                quotient = a / b
                # Integral quotients are kept exact, others are rounded for display
                if quotient.is_integer():
                    return quotient
                return round(quotient, self.division_precision)
            case Operator.MODULO:
                if b == 0:
                    raise ModuloByZeroError()
                if not math.isfinite(a):
                    # No remainder of an infinite dividend
                    return math.nan
                # C-style remainder: the sign follows the dividend
                return math.fmod(a, b)
        raise MalformedExpressionError(f"Unsupported operator: {op!r}")

    def _reduce(self, values: List[float], operators: List[Operator]) -> None:
        """Pop the top operator and its two operands, push the result."""
        op = operators.pop()
        b = values.pop()
        a = values.pop()
        values.append(self.apply(a, b, op))

    def evaluate(self, tokens: Sequence[Token]) -> float:
        """
        Evaluate a sequence of tokens.

        :param Sequence[Token] tokens: Alternating numbers and operators, starting and ending on a number

        :return: Computed result
        :rtype: float
        :raises EvaluationError: If the expression is malformed or an operation fails
        """
        self._check_well_formed(tokens)

        values: List[float] = []
        operators: List[Operator] = []

        for token in tokens:
            if isinstance(token, NumberToken):
                values.append(token.value)
            else:
                # Reduce stacked operators that bind at least as tightly
                while operators and operators[-1].precedence >= token.op.precedence:
                    self._reduce(values, operators)
                operators.append(token.op)

        while operators:
            self._reduce(values, operators)

        return values[0]

    def evaluate_text(self, expr: str) -> float:
        """
        Tokenize and evaluate a displayed expression.

        :param str expr: Expression string, e.g. "8 - 3 - 2"

        :return: Computed result
        :rtype: float
        :raises ValueError: If the expression is invalid or an operation fails
        """
        return self.evaluate(self.tokenize(expr))
