"""CLI utilities for infixcalc: context, exit codes and output formatting."""

from __future__ import annotations

from infixcalc.cli.context import CLIContext, ExitCode
from infixcalc.cli.output import OutputFormat

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
]
