"""Operator metadata: precedence, associativity and the arithmetic itself.

The table is read-only and shared by the converter (precedence and
associativity) and the evaluator (``apply``). Arithmetic follows IEEE-754
double semantics: division by zero and out-of-domain powers produce
``inf``/``nan`` rather than Python exceptions.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

__all__ = [
    "Associativity",
    "OperatorSpec",
    "OPERATORS",
    "get_operator",
    "is_operator",
]


class Associativity(str, Enum):
    """Grouping direction for operators of equal precedence."""

    LEFT = "left"  # a - b - c == (a - b) - c
    RIGHT = "right"  # a ^ b ^ c == a ^ (b ^ c)


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        # Sign follows the operands, including signed zero: 1 / -0.0 == -inf
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and int(x) % 2 == 1


def _power(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except ValueError:
        # math.pow refuses 0 ^ negative; IEEE-754 defines it as a pole
        if a == 0.0 and b < 0.0:
            return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
        # Undefined over the reals, e.g. (-8) ^ 0.5
        return math.nan
    except OverflowError:
        if a < 0.0 and _is_odd_integer(b):
            return -math.inf
        return math.inf


@dataclass(frozen=True, slots=True)
class OperatorSpec:
    """Static description of a binary operator.

    Attributes:
        symbol: Operator character as it appears in source text.
        precedence: Binding strength; higher binds tighter.
        associativity: Grouping for equal precedence.
        apply: Function computing ``a <op> b``.
    """

    symbol: str
    precedence: int
    associativity: Associativity
    apply: Callable[[float, float], float]

    @property
    def left_associative(self) -> bool:
        return self.associativity is Associativity.LEFT


OPERATORS: Mapping[str, OperatorSpec] = MappingProxyType(
    {
        "+": OperatorSpec("+", 1, Associativity.LEFT, lambda a, b: a + b),
        "-": OperatorSpec("-", 1, Associativity.LEFT, lambda a, b: a - b),
        "*": OperatorSpec("*", 2, Associativity.LEFT, lambda a, b: a * b),
        "/": OperatorSpec("/", 2, Associativity.LEFT, _divide),
        "^": OperatorSpec("^", 3, Associativity.RIGHT, _power),
    }
)


def get_operator(symbol: str) -> OperatorSpec:
    """Look up an operator by symbol.

    Raises:
        KeyError: If ``symbol`` is not a supported operator.
    """
    return OPERATORS[symbol]


def is_operator(char: str) -> bool:
    return char in OPERATORS
