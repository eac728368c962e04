"""Edit commands applied to the calculator expression."""
import math
from typing import List, Optional, Tuple

from arithmetic_calculator.common.errors import EvaluationError
from arithmetic_calculator.common.evaluator import ExpressionEvaluator
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.tokens import NumberToken, Operator, OperatorToken, Token
from arithmetic_calculator.session.state import ExpressionState


DIGITS: str = "0123456789"
POINT: str = "."


class ExpressionBuffer:
    """
    Reducer turning an ExpressionState and an edit command into the next ExpressionState.

    Every operation is a pure function of its arguments: the given state is never modified,
    a new state (or the same one for no-ops) is returned.

    Examples:
        - "5", "+", "3" builds "5 + 3"
        - "+" then "×" leaves "5 ×" (the last operator is overwritten)
        - evaluating "5 + 3" leaves "8" and the next digit starts a new expression
    """

    @staticmethod
    def clear() -> ExpressionState:
        """
        Return the canonical empty state: a single zero, no pending reset, no previous operand.

        :return: Empty state
        :rtype: ExpressionState
        """
        return ExpressionState()

    @staticmethod
    def append_digit_or_point(state: ExpressionState, ch: str) -> ExpressionState:
        """
        Append a digit or the decimal point to the trailing number.

        :param ExpressionState state: Current state
        :param str ch: A digit 0-9 or "."

        :return: Next state
        :rtype: ExpressionState
        :raises ValueError: If ch is neither a digit nor the decimal point
        """
        if len(ch) != 1 or ch not in DIGITS + POINT:
            raise ValueError(f"Expected a digit or '.', got {ch!r}")

        tokens: List[Token] = list(state.tokens)
        if state.pending_reset:
            # A finished result is replaced, not extended
            tokens = []

        trailing = tokens[-1] if tokens else None
        if isinstance(trailing, NumberToken) and not trailing.editable:
            # inf and nan cannot be extended, typing replaces them
            tokens.pop()
            trailing = None

        if not isinstance(trailing, NumberToken):
            # Start a new number after an operator or on an empty buffer
            tokens.append(NumberToken(text="0." if ch == POINT else ch))
        elif ch == POINT:
            if POINT in trailing.text:
                return state
            tokens[-1] = NumberToken(text=trailing.text + ch)
        elif trailing.text == "0":
            # No leading zeros such as "01"
            tokens[-1] = NumberToken(text=ch)
        else:
            tokens[-1] = NumberToken(text=trailing.text + ch)

        return state.model_copy(update={"tokens": tuple(tokens), "pending_reset": False})

    @staticmethod
    def choose_operator(state: ExpressionState, op: Operator) -> ExpressionState:
        """
        Append an operator, or overwrite the trailing one.

        :param ExpressionState state: Current state
        :param Operator op: Operator chosen by the user

        :return: Next state
        :rtype: ExpressionState
        """
        if not state.tokens:
            return state

        tokens: List[Token] = list(state.tokens)
        if isinstance(tokens[-1], OperatorToken):
            tokens[-1] = OperatorToken(op=op)
        else:
            tokens.append(OperatorToken(op=op))
        return state.model_copy(update={"tokens": tuple(tokens), "pending_reset": False})

    @staticmethod
    def delete_last(state: ExpressionState) -> ExpressionState:
        """
        Remove the trailing operator, or the last character of the trailing number.

        Right after an evaluation the whole expression is cleared.
        A number left empty (or holding a lone "-" or ".") is dropped, and so is an inf or nan result.
        An emptied buffer collapses to "0".

        :param ExpressionState state: Current state

        :return: Next state
        :rtype: ExpressionState
        """
        if state.pending_reset:
            return ExpressionBuffer.clear()

        tokens: List[Token] = list(state.tokens)
        if not tokens:
            return ExpressionBuffer.clear()

        trailing = tokens.pop()
        if isinstance(trailing, NumberToken) and trailing.editable:
            text = trailing.text[:-1]
            if text not in ("", "-", ".", "-."):
                tokens.append(NumberToken(text=text))

        if not tokens:
            return ExpressionBuffer.clear()
        return state.model_copy(update={"tokens": tuple(tokens)})

    @staticmethod
    def toggle_sign(state: ExpressionState) -> ExpressionState:
        """
        Negate the trailing number, leaving earlier tokens untouched.

        The sign is added to or removed from the typed text, so toggling twice restores the original state.
        Zero and nan have no sign to toggle.

        :param ExpressionState state: Current state

        :return: Next state
        :rtype: ExpressionState
        """
        trailing = state.trailing
        if not isinstance(trailing, NumberToken) or trailing.value == 0 or math.isnan(trailing.value):
            return state

        text = trailing.text[1:] if trailing.text.startswith("-") else "-" + trailing.text
        tokens = state.tokens[:-1] + (NumberToken(text=text),)
        return state.model_copy(update={"tokens": tokens})

    @staticmethod
    def evaluate_now(
        state: ExpressionState, evaluator: ExpressionEvaluator
    ) -> Tuple[ExpressionState, Optional[EvaluationError]]:
        """
        Evaluate the expression and replace it with its result.

        Incomplete expressions (empty or ending on an operator) are left as they are.
        On failure the state is returned unchanged together with the error, so the user can correct it.

        :param ExpressionState state: Current state
        :param ExpressionEvaluator evaluator: Evaluator to use

        :return: Tuple of (next state, error or None)
        :rtype: Tuple[ExpressionState, Optional[EvaluationError]]
        """
        if not state.tokens or state.pending_operator is not None:
            return state, None

        expression = state.display
        try:
            result = evaluator.evaluate(state.tokens)
        except EvaluationError as exc:
            logger.error(f"🧮❌ Could not evaluate {expression!r}: {exc}")
            return state, exc

        logger.info(f"🧮✅ {expression} = {result}")
        next_state = ExpressionState(
            tokens=(NumberToken.from_value(result),),
            pending_reset=True,
            last_result=result,
            previous_operand=expression,
        )
        return next_state, None
