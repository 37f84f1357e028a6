"""Lexer: turn expression text into tokens.

The lexer scans left to right, collecting digits and dots into a literal
buffer. A ``-`` is part of a literal when it appears where an operand is
expected (start of input, after an operator, after ``(``) and a binary
operator otherwise.
"""

from __future__ import annotations

import math

from infixcalc.expressions.errors import MalformedNumberError, UnexpectedCharacterError
from infixcalc.expressions.operators import is_operator
from infixcalc.expressions.tokens import LParen, Number, Operator, RParen, Token
from infixcalc.logging import get_logger

__all__ = ["tokenize"]

logger = get_logger(__name__)

_DIGITS = frozenset("0123456789")


class _Scanner:
    """Mutable state for a single tokenize() call."""

    def __init__(self, text: str, strict: bool) -> None:
        self.text = text
        self.strict = strict
        self.tokens: list[Token] = []
        self.buffer: list[str] = []
        self.buffer_start = 0
        self.expect_unary = True

    def push_literal_char(self, char: str, position: int) -> None:
        if not self.buffer:
            self.buffer_start = position
        self.buffer.append(char)

    def flush(self) -> None:
        """Emit the pending literal, if any, as a Number token."""
        if not self.buffer:
            return
        literal = "".join(self.buffer)
        self.buffer.clear()
        try:
            value = float(literal)
            # Digit runs longer than ~309 places parse to inf
            if not math.isfinite(value):
                raise ValueError(literal)
        except ValueError:
            if self.strict:
                raise MalformedNumberError(
                    literal, self.buffer_start, expression=self.text
                ) from None
            logger.warning(
                "malformed_number_dropped",
                literal=literal,
                position=self.buffer_start,
            )
            return
        self.tokens.append(Number(value, self.buffer_start))


def tokenize(text: str, *, strict: bool = True) -> list[Token]:
    """Split an arithmetic expression into tokens.

    Args:
        text: Expression source, e.g. ``"3 + 4 * 2"``.
        strict: If True, a literal that is not a valid float (``1.2.3``, a
            lone ``-``) raises MalformedNumberError. If False it is dropped
            with a warning and lexing continues, and whitespace inside a
            literal is skipped rather than ending it (``1 2`` is ``12``).

    Returns:
        Tokens in source order.

    Raises:
        UnexpectedCharacterError: For any character outside digits, ``.``,
            ``+ - * / ^``, parentheses and whitespace.
        MalformedNumberError: For an unparseable literal when ``strict``.

    Examples:
        >>> [str(t) for t in tokenize("3 + 4 * 2")]
        ['3', '+', '4', '*', '2']
        >>> [str(t) for t in tokenize("-5 + 3")]
        ['-5', '+', '3']
    """
    scanner = _Scanner(text, strict)

    for position, char in enumerate(text):
        if char in _DIGITS or char == ".":
            scanner.push_literal_char(char, position)
            scanner.expect_unary = False
        elif char == "-" and scanner.expect_unary:
            scanner.push_literal_char(char, position)
        elif is_operator(char):
            scanner.flush()
            scanner.tokens.append(Operator(char, position))
            scanner.expect_unary = True
        elif char == "(":
            scanner.flush()
            scanner.tokens.append(LParen(position))
            scanner.expect_unary = True
        elif char == ")":
            scanner.flush()
            scanner.tokens.append(RParen(position))
            scanner.expect_unary = False
        elif char.isspace():
            # A bare sign waits for its digits ("- 5"). In strict mode a started
            # literal ends here; lenient mode joins "1 2" into 12.
            if strict and not scanner.expect_unary:
                scanner.flush()
        else:
            raise UnexpectedCharacterError(char, position, expression=text)

    scanner.flush()

    logger.debug("tokenize_completed", token_count=len(scanner.tokens))
    return scanner.tokens
