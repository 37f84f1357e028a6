"""CLI entry point for infixcalc.

This module defines the Click-based command-line interface.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from infixcalc.logging import configure_logging

# Pick up INFIXCALC_* variables from a .env file in the working directory
# before configuration is read.
load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)

from infixcalc import __version__  # noqa: E402
from infixcalc.calculator import CalculationResult, Calculator  # noqa: E402
from infixcalc.cli.console import console, err_console  # noqa: E402
from infixcalc.cli.context import CLIContext, ExitCode  # noqa: E402
from infixcalc.cli.output import (  # noqa: E402
    OutputFormat,
    format_calculation_error,
    format_error,
    format_json,
    format_result,
)
from infixcalc.config import (  # noqa: E402
    EvaluationConfig,
    InfixCalcConfig,
    load_config,
)
from infixcalc.exceptions import ConfigError  # noqa: E402
from infixcalc.expressions.errors import CalculationError  # noqa: E402
from infixcalc.logging import bind_context, clear_context, get_logger  # noqa: E402

logger = get_logger(__name__)

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def _resolve_log_level(config: InfixCalcConfig, verbose: int, quiet: bool) -> int:
    """Pick the log level. Priority: quiet > verbose > config."""
    if quiet:
        return logging.ERROR
    if verbose > 0:
        return logging.INFO if verbose == 1 else logging.DEBUG
    return _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)


def _resolve_evaluation(
    config: InfixCalcConfig, lenient: bool | None, finite_only: bool
) -> EvaluationConfig:
    evaluation = config.evaluation
    if lenient is not None:
        preset = EvaluationConfig.lenient() if lenient else EvaluationConfig()
        evaluation = preset.model_copy(
            update={"allow_non_finite": evaluation.allow_non_finite}
        )
    if finite_only:
        evaluation = evaluation.model_copy(update={"allow_non_finite": False})
    return evaluation


def _read_expression() -> str:
    """Prompt for one line of input on stderr, like an interactive calculator."""
    line: str = click.prompt(
        "Question", prompt_suffix=": ", default="", show_default=False, err=True
    )
    return line


def _emit_error(cli_ctx: CLIContext, error: CalculationError) -> None:
    if cli_ctx.output_format is OutputFormat.JSON:
        payload = {"expression": error.expression, "error": error.to_info().to_dict()}
        console.print(format_json(payload), markup=False, soft_wrap=True)
    else:
        err_console.print(
            format_calculation_error(error), markup=False, soft_wrap=True
        )


def _emit_result(cli_ctx: CLIContext, result: CalculationResult) -> None:
    if cli_ctx.output_format is OutputFormat.JSON:
        console.print(format_json(result.to_dict()), markup=False, soft_wrap=True)
    else:
        text = format_result(
            result,
            show_tokens=cli_ctx.show_tokens,
            show_postfix=cli_ctx.show_postfix,
        )
        console.print(text, markup=False, soft_wrap=True)


@click.command()
@click.version_option(version=__version__, prog_name="infixcalc")
@click.argument("expression", required=False)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, dir_okay=False, path_type=Path),
    default=None,
    help="Path to config file (overrides ./infixcalc.yaml).",
)
@click.option(
    "--tokens",
    "show_tokens",
    is_flag=True,
    default=False,
    help="Also print the token sequence.",
)
@click.option(
    "--postfix",
    "show_postfix",
    is_flag=True,
    default=False,
    help="Also print the postfix (RPN) sequence.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Output format (default: from config, else text).",
)
@click.option(
    "--lenient/--strict",
    default=None,
    help="Tolerate malformed numbers, unmatched parentheses and extra "
    "operands (default: from config, else strict).",
)
@click.option(
    "--finite-only",
    is_flag=True,
    default=False,
    help="Treat inf/nan results (e.g. division by zero) as errors.",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress non-essential output (ERROR level only).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    expression: str | None,
    config_file: Path | None,
    show_tokens: bool,
    show_postfix: bool,
    output_format: str | None,
    lenient: bool | None,
    finite_only: bool,
    verbose: int,
    quiet: bool,
) -> None:
    """Evaluate an arithmetic EXPRESSION such as "(1 + 2) * 3".

    Supports + - * / ^ and parentheses. Without EXPRESSION, one line is read
    from the terminal. Put "--" before an expression that starts with a
    minus sign: infixcalc -- "-5 + 3".
    """
    try:
        config = load_config(config_file)
    except ConfigError as e:
        # Logging is not configured yet
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details=details), err=True)
        ctx.exit(ExitCode.CONFIG)

    configure_logging(level=_resolve_log_level(config, verbose, quiet))

    cli_ctx = CLIContext(
        evaluation=_resolve_evaluation(config, lenient, finite_only),
        output_format=OutputFormat(output_format or config.output.format),
        show_tokens=show_tokens or config.output.show_tokens,
        show_postfix=show_postfix or config.output.show_postfix,
    )

    if expression is None:
        try:
            expression = _read_expression()
        except click.Abort:
            ctx.exit(ExitCode.INTERRUPTED)

    # Stage events carry the expression for the rest of the run
    bind_context(expression=expression)
    try:
        try:
            result = Calculator(cli_ctx.evaluation).run(expression)
        except CalculationError as e:
            logger.info("calculation_rejected", stage=e.stage.value, error=e.message)
            _emit_error(cli_ctx, e)
            ctx.exit(ExitCode.FAILURE)
        _emit_result(cli_ctx, result)
    finally:
        clear_context()


if __name__ == "__main__":
    cli()
