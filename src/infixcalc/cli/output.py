"""Output formatting utilities for the infixcalc CLI."""

from __future__ import annotations

import json
import math
from enum import Enum
from typing import Any

from infixcalc.calculator import CalculationResult
from infixcalc.expressions.errors import CalculationError
from infixcalc.expressions.tokens import format_number, format_tokens

__all__ = [
    "OutputFormat",
    "format_error",
    "format_calculation_error",
    "format_result",
    "format_json",
]


class OutputFormat(str, Enum):
    """Supported output formats.

    Values:
        TEXT: Human-readable lines (default).
        JSON: One JSON object per run.
    """

    TEXT = "text"
    JSON = "json"


def format_error(message: str, details: list[str] | None = None) -> str:
    """Format an error message with optional indented detail lines.

    Example:
        >>> print(format_error("Bad config", details=["Field: output.format"]))
        Error: Bad config
          Field: output.format
    """
    lines = [f"Error: {message}"]

    if details:
        for detail in details:
            lines.append(f"  {detail}")

    return "\n".join(lines)


def format_calculation_error(error: CalculationError) -> str:
    """Format a pipeline error with its stage and a caret under the position.

    Example:
        >>> from infixcalc.expressions.errors import UnexpectedCharacterError
        >>> err = UnexpectedCharacterError("&", 2, expression="3 & 4")
        >>> print(format_calculation_error(err))
        Error: Unexpected character '&' at position 2
          Stage: lex
          3 & 4
            ^
    """
    details = [f"Stage: {error.stage.value}"]
    pointer = error.pointer()
    if pointer is not None:
        details.extend(pointer.splitlines())
    return format_error(error.message, details=details)


def format_result(
    result: CalculationResult,
    *,
    show_tokens: bool = False,
    show_postfix: bool = False,
) -> str:
    """Format a successful calculation as text.

    Example:
        >>> from infixcalc import Calculator
        >>> print(format_result(Calculator().run("3 + 4 * 2"), show_postfix=True))
        Postfix: 3 4 2 * +
        Result: 11
    """
    lines = []
    if show_tokens:
        lines.append(f"Tokens: {format_tokens(result.tokens)}")
    if show_postfix:
        lines.append(f"Postfix: {format_tokens(result.postfix)}")
    lines.append(f"Result: {format_number(result.value)}")
    return "\n".join(lines)


def _encode_non_finite(data: Any) -> Any:
    if isinstance(data, float) and not math.isfinite(data):
        return format_number(data)
    if isinstance(data, dict):
        return {key: _encode_non_finite(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [_encode_non_finite(item) for item in data]
    return data


def format_json(data: Any) -> str:
    """Format data as indented, strictly valid JSON.

    ``inf``, ``-inf`` and ``nan`` have no JSON literal and are written as the
    strings ``"inf"``, ``"-inf"`` and ``"nan"``.

    Example:
        >>> print(format_json({"result": float("inf")}))
        {
          "result": "inf"
        }
    """
    return json.dumps(_encode_non_finite(data), indent=2, allow_nan=False)
