"""
Command-line entrypoint replaying a calculator tape.

This script:
- Reads a .txt tape of calculator commands given as argument
- Replays it through a calculator session
- Writes the display after every command next to the input file

Example tape, one command per line:
    7
    ÷
    2
    =
"""

import argparse
from pathlib import Path

from pydantic import BaseModel, Field, FilePath, ValidationError

from arithmetic_calculator.tape.runner import TapeRunner


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the tape file.
    precision : int
        Decimal places kept for non-integral quotients.
    """

    file_path: FilePath
    precision: int = Field(default=6, ge=0)


def parse_args(argv=None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(description="Replay a tape of calculator commands")

    parser.add_argument(
        "file_path",
        help="Path to the .txt tape",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=6,
        help="Decimal places kept for non-integral quotients (default: 6)",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(file_path=args.file_path, precision=args.precision)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the results file path based on the tape path.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: tapes/session.txt
    output: tapes/session_txt_results.txt

    :param input_path: Path to the tape
    :return: Path to the output file
    """
    stem = input_path.name[: -len("".join(input_path.suffixes))] if input_path.suffixes else input_path.name
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def main(argv=None) -> None:
    """
    Replay the tape given on the command line.
    """
    cli_args = parse_args(argv)
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = build_output_path(input_path)

    runner = TapeRunner(division_precision=cli_args.precision)
    runner.run(input_path, output_path)


if __name__ == "__main__":
    main()
