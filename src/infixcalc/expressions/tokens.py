"""Token models for arithmetic expressions.

Tokens are small frozen dataclasses, one class per kind, combined into the
``Token`` union. Stages dispatch on them with ``isinstance``.

Every token remembers the 0-based character position where it starts in the
source text. The position is only used for error reporting and does not take
part in equality, so ``tokenize("3+4") == tokenize("3 + 4")``.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

__all__ = [
    "Number",
    "Operator",
    "LParen",
    "RParen",
    "Token",
    "format_number",
    "format_tokens",
]

_EXACT_INTEGER_LIMIT = 1e16


def format_number(value: float) -> str:
    """Render a float without a trailing ``.0`` for integral values.

    Integral values of magnitude 1e16 and above keep the float form
    (``1e+300``). Negative zero keeps its sign.

    Examples:
        >>> format_number(11.0)
        '11'
        >>> format_number(2.5)
        '2.5'
        >>> format_number(float("inf"))
        'inf'
    """
    if value.is_integer() and abs(value) < _EXACT_INTEGER_LIMIT:
        sign = "-" if math.copysign(1.0, value) < 0 else ""
        return f"{sign}{abs(int(value))}"
    return repr(value)


@dataclass(frozen=True, slots=True)
class Number:
    """Numeric literal.

    Attributes:
        value: Parsed double-precision value (may be negative).
        position: Index of the first character of the literal.
    """

    value: float
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return format_number(self.value)


@dataclass(frozen=True, slots=True)
class Operator:
    """Binary operator, one of ``+ - * / ^``.

    Attributes:
        symbol: The single-character operator symbol.
        position: Index of the operator in the source text.
    """

    symbol: str
    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True, slots=True)
class LParen:
    """Opening parenthesis."""

    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return "("


@dataclass(frozen=True, slots=True)
class RParen:
    """Closing parenthesis."""

    position: int = field(default=0, compare=False)

    def __str__(self) -> str:
        return ")"


Token = Number | Operator | LParen | RParen


def format_tokens(tokens: Iterable[Token]) -> str:
    """Join tokens with single spaces.

    Examples:
        >>> format_tokens([Number(3.0), Number(4.0), Operator("+")])
        '3 4 +'
    """
    return " ".join(str(token) for token in tokens)
