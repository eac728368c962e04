"""Failures raised while evaluating an expression."""


class EvaluationError(ValueError):
    """Base class for every failure raised by the evaluator."""


class DivisionByZeroError(EvaluationError):
    """Raised when the right-hand operand of a division is zero."""

    def __init__(self) -> None:
        super().__init__("Division by zero")


class ModuloByZeroError(EvaluationError):
    """Raised when the right-hand operand of a modulo is zero."""

    def __init__(self) -> None:
        super().__init__("Modulo by zero is undefined")


class MalformedExpressionError(EvaluationError):
    """Raised when a token sequence does not alternate number, operator, number."""
