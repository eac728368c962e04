"""Calculator session owning the current expression state."""
import threading
from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from arithmetic_calculator.common.commands import CommandName, EditCommand, EvaluationOutcome
from arithmetic_calculator.common.errors import EvaluationError
from arithmetic_calculator.common.evaluator import ExpressionEvaluator
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.common.tokens import Operator
from arithmetic_calculator.session.buffer import ExpressionBuffer
from arithmetic_calculator.session.state import ExpressionState


class CalculatorSession(BaseModel):
    """
    Single owner of the expression being built on a calculator.

    Features:
        - Applies edit commands through ExpressionBuffer, one at a time.
        - Reports evaluation failures to the on_error callback and in the returned outcome.
        - Exposes the display strings a presentation layer needs.
    """

    # Allow arbitrary types like callbacks
    model_config = ConfigDict(arbitrary_types_allowed=True)

    state: ExpressionState = Field(default_factory=ExpressionState, description="Current expression state")
    evaluator: ExpressionEvaluator = Field(
        default_factory=ExpressionEvaluator, description="Evaluator used by evaluate_now"
    )
    on_error: Optional[Callable[[EvaluationError], None]] = Field(
        default=None, description="Called with the failure when an evaluation fails"
    )

    # Commands are applied one at a time, even if called from several threads
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    @property
    def display(self) -> str:
        """Current expression, e.g. "5 + 2 × 3"."""
        return self.state.display

    @property
    def previous_operand(self) -> str:
        """Expression that produced the last result, empty if none."""
        return self.state.previous_operand

    def _outcome(self, error: Optional[EvaluationError] = None) -> EvaluationOutcome:
        return EvaluationOutcome(
            display=self.display,
            previous_operand=self.previous_operand,
            error=str(error) if error is not None else None,
        )

    def append_digit_or_point(self, ch: str) -> EvaluationOutcome:
        """Append a digit or the decimal point."""
        with self._lock:
            self.state = ExpressionBuffer.append_digit_or_point(self.state, ch)
            return self._outcome()

    def choose_operator(self, op: Operator) -> EvaluationOutcome:
        """Append or overwrite the trailing operator."""
        with self._lock:
            self.state = ExpressionBuffer.choose_operator(self.state, op)
            return self._outcome()

    def delete_last(self) -> EvaluationOutcome:
        """Delete the trailing operator or digit."""
        with self._lock:
            self.state = ExpressionBuffer.delete_last(self.state)
            return self._outcome()

    def toggle_sign(self) -> EvaluationOutcome:
        """Negate the trailing number."""
        with self._lock:
            self.state = ExpressionBuffer.toggle_sign(self.state)
            return self._outcome()

    def clear(self) -> EvaluationOutcome:
        """Reset to the empty expression."""
        with self._lock:
            self.state = ExpressionBuffer.clear()
            return self._outcome()

    def evaluate_now(self) -> EvaluationOutcome:
        """
        Evaluate the current expression.

        On failure the expression is kept as it is, the error is passed to on_error
        and returned in the outcome.

        :return: Display after evaluation and the failure message, if any
        :rtype: EvaluationOutcome
        """
        with self._lock:
            self.state, error = ExpressionBuffer.evaluate_now(self.state, self.evaluator)
            if error is not None and self.on_error is not None:
                self.on_error(error)
            return self._outcome(error)

    def execute(self, command: EditCommand) -> EvaluationOutcome:
        """
        Dispatch a command to the matching operation.

        :param EditCommand command: Command to execute

        :return: Display after the command and the failure message, if any
        :rtype: EvaluationOutcome
        """
        logger.debug(f"⌨️ {command.name.value} {command.argument or ''}".rstrip())
        match command.name:
            case CommandName.APPEND:
                return self.append_digit_or_point(command.argument)
            case CommandName.OPERATOR:
                return self.choose_operator(Operator.from_symbol(command.argument))
            case CommandName.DELETE:
                return self.delete_last()
            case CommandName.TOGGLE_SIGN:
                return self.toggle_sign()
            case CommandName.EVALUATE:
                return self.evaluate_now()
            case CommandName.CLEAR:
                return self.clear()
        raise ValueError(f"Unsupported command: {command.name!r}")
