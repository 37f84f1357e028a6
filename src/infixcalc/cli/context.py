"""CLI context and exit codes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from infixcalc.cli.output import OutputFormat
from infixcalc.config import EvaluationConfig

__all__ = [
    "ExitCode",
    "CLIContext",
]


class ExitCode(IntEnum):
    """Process exit codes.

    - 0 for success
    - 1 when the expression could not be calculated
    - 2 for usage errors (raised by Click itself)
    - 3 for configuration errors
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2
    CONFIG = 3
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Resolved options for one CLI invocation.

    Command-line flags have already been merged over the loaded config.

    Attributes:
        evaluation: Effective strictness options.
        output_format: Effective output format.
        show_tokens: Print the infix token sequence.
        show_postfix: Print the postfix sequence.
    """

    evaluation: EvaluationConfig
    output_format: OutputFormat = OutputFormat.TEXT
    show_tokens: bool = False
    show_postfix: bool = False
