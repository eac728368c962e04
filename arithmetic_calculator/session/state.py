"""Immutable state of the expression being built on the calculator."""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_calculator.common.tokens import NumberToken, Operator, OperatorToken, Token


class ExpressionState(BaseModel):
    """
    Snapshot of the calculator expression.

    Tokens alternate number, operator, number, ... and always start with a number.
    The sequence may end on an operator only while the user is still typing.
    """

    # Every edit produces a new state, the previous one is never modified
    model_config = ConfigDict(frozen=True)

    tokens: Tuple[Token, ...] = Field(
        default=(NumberToken(text="0"),), description="Tokens in left-to-right reading order"
    )
    pending_reset: bool = Field(
        default=False, description="Next digit starts a new expression instead of extending the result"
    )
    last_result: Optional[float] = Field(default=None, description="Result of the most recent evaluation")
    previous_operand: str = Field(default="", description="Expression that produced last_result")

    @property
    def trailing(self) -> Optional[Token]:
        """Last token of the expression, or None if there is none."""
        return self.tokens[-1] if self.tokens else None

    @property
    def pending_operator(self) -> Optional[Operator]:
        """Operator waiting for its right-hand operand, if the expression ends on one."""
        trailing = self.trailing
        return trailing.op if isinstance(trailing, OperatorToken) else None

    @property
    def display(self) -> str:
        """Expression as shown on the calculator, e.g. "5 + 2 × 3"."""
        return " ".join(str(token) for token in self.tokens)
