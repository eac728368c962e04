"""Pydantic models for calculator commands and their outcomes."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from arithmetic_calculator.common.tokens import Operator


class CommandName(str, Enum):
    """Edit and evaluate commands accepted by a calculator session."""

    APPEND = "append"
    OPERATOR = "operator"
    DELETE = "del"
    TOGGLE_SIGN = "neg"
    EVALUATE = "="
    CLEAR = "clear"


# Commands written on a tape line without an argument
BARE_COMMANDS: frozenset = frozenset(
    c.value for c in (CommandName.DELETE, CommandName.TOGGLE_SIGN, CommandName.EVALUATE, CommandName.CLEAR)
)

class EditCommand(BaseModel):
    """Represents a single command sent to a calculator session."""

    model_config = ConfigDict(frozen=True)

    name: CommandName = Field(..., description="Command to execute")
    argument: Optional[str] = Field(default=None, description="Digit, point or operator symbol")

    @model_validator(mode="after")
    def argument_matches_command(self) -> "EditCommand":
        """Ensure append and operator commands carry an argument, and only they do."""
        needs_argument = self.name in (CommandName.APPEND, CommandName.OPERATOR)
        if needs_argument and not self.argument:
            raise ValueError(f"Command {self.name.value!r} requires an argument")
        if not needs_argument and self.argument is not None:
            raise ValueError(f"Command {self.name.value!r} takes no argument")
        return self

    @classmethod
    def parse(cls, line: str) -> "EditCommand":
        """
        Parse one line of a tape into a command.

        Accepted lines:
            - a digit 0-9 or "." appends to the trailing number
            - + - × ÷ % (or * and /) chooses an operator
            - "=" evaluates, "del" deletes, "neg" toggles the sign, "clear" clears

        :param str line: Tape line

        :return: Parsed command
        :rtype: EditCommand
        :raises ValueError: If the line is not a known command
        """
        text = line.strip()
        if len(text) == 1 and text in "0123456789.":
            return cls(name=CommandName.APPEND, argument=text)
        if text.lower() in BARE_COMMANDS:
            return cls(name=CommandName(text.lower()))
        # Operator.from_symbol raises ValueError for anything else
        return cls(name=CommandName.OPERATOR, argument=Operator.from_symbol(text).value)


class EvaluationOutcome(BaseModel):
    """Represents what the display shows after a command, and the failure if any."""

    display: str = Field(..., description="Current expression")
    previous_operand: str = Field(default="", description="Expression that produced the last result")
    error: Optional[str] = Field(default=None, description="Failure message of the command, if it failed")

    @property
    def ok(self) -> bool:
        """True if the command did not fail."""
        return self.error is None
