"""Postfix evaluation with a value stack.

Numbers are pushed; each operator pops its right operand, then its left
operand, and pushes the result. A well-formed postfix sequence leaves
exactly one value behind.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from infixcalc.expressions.errors import (
    ExtraOperandsError,
    MalformedExpressionError,
    MissingOperandError,
    NonFiniteResultError,
    NoResultError,
)
from infixcalc.expressions.operators import get_operator
from infixcalc.expressions.tokens import LParen, Number, Operator, RParen, Token
from infixcalc.logging import get_logger

__all__ = ["evaluate"]

logger = get_logger(__name__)


def evaluate(
    tokens: Sequence[Token],
    *,
    strict: bool = True,
    allow_non_finite: bool = True,
) -> float:
    """Evaluate a postfix token sequence.

    Division by zero and powers that are undefined over the reals follow
    IEEE-754: ``10 / 0`` is ``inf``, ``0 / 0`` and ``(-8) ^ 0.5`` are ``nan``.

    Args:
        tokens: Postfix tokens as produced by to_postfix().
        strict: If True, leftover values raise ExtraOperandsError. If False
            the most recently pushed value is returned.
        allow_non_finite: If False, any operation producing ``inf`` or
            ``nan`` raises NonFiniteResultError.

    Returns:
        The value of the expression.

    Raises:
        MissingOperandError: An operator has fewer than two operands.
        MalformedExpressionError: A parenthesis appears in the sequence.
        NoResultError: The sequence produced no value.
        ExtraOperandsError: More than one value remains and ``strict``.
        NonFiniteResultError: A non-finite result when not allowed.

    Examples:
        >>> evaluate([Number(3.0), Number(4.0), Number(2.0),
        ...           Operator("*"), Operator("+")])
        11.0
    """
    stack: list[float] = []

    for token in tokens:
        if isinstance(token, Number):
            stack.append(token.value)
        elif isinstance(token, Operator):
            if len(stack) < 2:
                raise MissingOperandError(token.symbol, token.position)
            right = stack.pop()
            left = stack.pop()
            result = get_operator(token.symbol).apply(left, right)
            if not allow_non_finite and not math.isfinite(result):
                raise NonFiniteResultError(token.symbol, result, token.position)
            stack.append(result)
        elif isinstance(token, (LParen, RParen)):
            raise MalformedExpressionError(str(token), token.position)

    if not stack:
        raise NoResultError()
    if len(stack) > 1:
        if strict:
            raise ExtraOperandsError(len(stack))
        logger.warning("extra_operands_ignored", count=len(stack))

    logger.debug("evaluation_completed", result=stack[-1])
    return stack[-1]
