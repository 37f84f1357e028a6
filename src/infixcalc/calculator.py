"""Calculator: run the tokenize -> to_postfix -> evaluate pipeline.

Example:
    ```python
    from infixcalc import Calculator, calculate

    calculate("(1 + 2) * 3")  # 9.0

    result = Calculator().run("3 + 4 * 2")
    result.value                    # 11.0
    format_tokens(result.postfix)   # "3 4 2 * +"
    ```
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from infixcalc.config import EvaluationConfig
from infixcalc.expressions.converter import to_postfix
from infixcalc.expressions.errors import CalculationError
from infixcalc.expressions.evaluator import evaluate
from infixcalc.expressions.lexer import tokenize
from infixcalc.expressions.tokens import Token, format_tokens
from infixcalc.logging import get_logger

__all__ = ["CalculationResult", "Calculator", "calculate"]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class CalculationResult:
    """Outcome of a successful pipeline run.

    Attributes:
        expression: The source text.
        tokens: Infix tokens from the lexer.
        postfix: Tokens in postfix order.
        value: The computed result.
    """

    expression: str
    tokens: tuple[Token, ...]
    postfix: tuple[Token, ...]
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "expression": self.expression,
            "tokens": [str(token) for token in self.tokens],
            "postfix": format_tokens(self.postfix),
            "result": self.value,
        }


class Calculator:
    """Evaluates arithmetic expressions with a fixed set of options.

    Instances hold only immutable options and may be shared across threads.

    Attributes:
        options: Strictness settings applied to every stage.
    """

    def __init__(self, options: EvaluationConfig | None = None) -> None:
        self.options = options or EvaluationConfig()

    def tokenize(self, text: str) -> list[Token]:
        return tokenize(text, strict=self.options.strict_numbers)

    def to_postfix(self, tokens: Sequence[Token]) -> list[Token]:
        return to_postfix(tokens, strict=self.options.strict_parentheses)

    def evaluate(self, postfix: Sequence[Token]) -> float:
        return evaluate(
            postfix,
            strict=self.options.reject_extra_operands,
            allow_non_finite=self.options.allow_non_finite,
        )

    def run(self, text: str) -> CalculationResult:
        """Run the full pipeline on ``text``.

        Args:
            text: Expression source.

        Returns:
            CalculationResult with both token sequences and the value.

        Raises:
            CalculationError: From whichever stage failed first. Its
                ``expression`` attribute is set to ``text``.
        """
        log = logger.bind(expression=text)
        try:
            tokens = self.tokenize(text)
            postfix = self.to_postfix(tokens)
            value = self.evaluate(postfix)
        except CalculationError as e:
            e.expression = text
            log.debug(
                "calculation_failed",
                stage=e.stage.value,
                error=type(e).__name__,
                reason=e.message,
            )
            raise

        log.debug("calculation_completed", result=value)
        return CalculationResult(
            expression=text,
            tokens=tuple(tokens),
            postfix=tuple(postfix),
            value=value,
        )

    def calculate(self, text: str) -> float:
        """Evaluate ``text`` and return only the number."""
        return self.run(text).value


def calculate(text: str, *, options: EvaluationConfig | None = None) -> float:
    """Evaluate an arithmetic expression.

    Args:
        text: Expression source, e.g. ``"2 ^ 3 ^ 2"``.
        options: Strictness settings; defaults to strict everything with
            ``inf``/``nan`` results allowed.

    Returns:
        The value of the expression.

    Raises:
        CalculationError: If lexing, conversion or evaluation fails.

    Examples:
        >>> calculate("2 ^ 3 ^ 2")
        512.0
        >>> calculate("-5 + 3")
        -2.0
    """
    return Calculator(options).calculate(text)
