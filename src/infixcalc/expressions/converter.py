"""Shunting-yard conversion from infix to postfix token order.

Numbers go straight to the output. Operators wait on a stack until an
operator that binds less tightly arrives (or an equal one, for left
associative operators), and parentheses fence off the stack.

Examples:
    3 + 4 * 2      ->  3 4 2 * +
    (1 + 2) * 3    ->  1 2 + 3 *
    2 ^ 3 ^ 2      ->  2 3 2 ^ ^
"""

from __future__ import annotations

from collections.abc import Sequence

from infixcalc.expressions.errors import UnbalancedParenthesesError
from infixcalc.expressions.operators import get_operator
from infixcalc.expressions.tokens import LParen, Number, Operator, RParen, Token
from infixcalc.logging import get_logger

__all__ = ["to_postfix"]

logger = get_logger(__name__)


def _should_pop(top: Operator, incoming: Operator) -> bool:
    top_spec = get_operator(top.symbol)
    incoming_spec = get_operator(incoming.symbol)
    if top_spec.precedence > incoming_spec.precedence:
        return True
    return (
        top_spec.precedence == incoming_spec.precedence
        and incoming_spec.left_associative
    )


def to_postfix(tokens: Sequence[Token], *, strict: bool = True) -> list[Token]:
    """Reorder infix tokens into postfix (Reverse Polish) order.

    Args:
        tokens: Infix tokens as produced by tokenize().
        strict: If True, unmatched parentheses raise
            UnbalancedParenthesesError. If False, a stray ``)`` is ignored
            and a never-closed ``(`` is passed through to the output, where
            the evaluator rejects it.

    Returns:
        Tokens in postfix order. Parentheses never appear in the output of a
        strict conversion.

    Raises:
        UnbalancedParenthesesError: On unmatched parentheses when ``strict``.
    """
    output: list[Token] = []
    stack: list[Operator | LParen] = []

    for token in tokens:
        if isinstance(token, Number):
            output.append(token)
        elif isinstance(token, Operator):
            while (
                stack
                and isinstance(stack[-1], Operator)
                and _should_pop(stack[-1], token)
            ):
                output.append(stack.pop())
            stack.append(token)
        elif isinstance(token, LParen):
            stack.append(token)
        elif isinstance(token, RParen):
            while stack and not isinstance(stack[-1], LParen):
                output.append(stack.pop())
            if stack:
                stack.pop()
            elif strict:
                raise UnbalancedParenthesesError(")", token.position)
            else:
                logger.warning("unmatched_paren_ignored", position=token.position)

    while stack:
        top = stack.pop()
        if strict and isinstance(top, LParen):
            raise UnbalancedParenthesesError("(", top.position)
        output.append(top)

    logger.debug("postfix_conversion_completed", token_count=len(output))
    return output
