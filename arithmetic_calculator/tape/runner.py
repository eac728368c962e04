"""Replay a tape of calculator commands."""
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field, FilePath

from arithmetic_calculator.common.commands import EditCommand, EvaluationOutcome
from arithmetic_calculator.common.evaluator import ExpressionEvaluator
from arithmetic_calculator.common.logger import logger
from arithmetic_calculator.session.session import CalculatorSession


class TapeRunner(BaseModel):
    """
    Replays a recorded tape of calculator commands and writes what the display shows after each one.

    The tape runner:
    - reads commands, one per line, from a plain text tape
    - feeds them to a fresh CalculatorSession in order
    - writes "<command> -> <display>" (or "<command> -> ERROR: <message>") lines into an output file
    """

    # Make the Pydantic instance immutable (read-only), a replay must not change configuration midway
    model_config = ConfigDict(frozen=True)

    division_precision: int = Field(
        default=6, ge=0, description="Decimal places kept for non-integral quotients"
    )

    def load(self, input_file: FilePath) -> List[str]:
        """
        Load the non-empty lines of a tape.

        :param FilePath input_file: Path to the .txt tape

        :return: Tape lines, stripped, without blank lines
        :rtype: List[str]
        :raises ValueError: If the tape is not a .txt file
        """
        if input_file.suffix != ".txt":
            raise ValueError(f"📼❌ Unsupported tape format: {input_file.suffix or input_file.name}")
        content = input_file.read_text(encoding="utf-8")
        return [line.strip() for line in content.splitlines() if line.strip()]

    def replay(self, lines: List[str]) -> List[str]:
        """
        Run tape lines through a fresh session.

        A line that is not a valid command is reported as an error and does not stop the replay.

        :param List[str] lines: Tape lines

        :return: One result line per tape line
        :rtype: List[str]
        """
        session = CalculatorSession(
            evaluator=ExpressionEvaluator(division_precision=self.division_precision)
        )
        results: List[str] = []
        for line_number, line in enumerate(lines, start=1):
            try:
                outcome: EvaluationOutcome = session.execute(EditCommand.parse(line))
            except ValueError as exc:
                logger.error(f"📼❌ Invalid command on line {line_number}: {line!r} ({exc})")
                results.append(f"{line} -> ERROR: {exc}")
                continue
            if outcome.ok:
                results.append(f"{line} -> {outcome.display}")
            else:
                results.append(f"{line} -> ERROR: {outcome.error}")
        return results

    def run(self, input_file: FilePath, output_file: Path) -> None:
        """
        Replay a tape and write the results to an output file.

        :param FilePath input_file: Path to the .txt tape
        :param Path output_file: Path where results will be written

        :return: None
        :raises ValueError: If the tape is not a .txt file
        """
        logger.info(f"📼 Replaying tape {input_file}")
        results = self.replay(self.load(input_file))
        with output_file.open("w", encoding="utf-8") as f_out:
            for result in results:
                f_out.write(f"{result}\n")
        logger.info(f"📼✅ {len(results)} commands replayed, results written to {output_file}")
