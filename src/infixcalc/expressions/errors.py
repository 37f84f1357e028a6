"""Error types raised by the expression pipeline.

Each error records the pipeline stage that failed so callers can report
where a calculation went wrong, not only why:

- LexError (stage ``lex``): the text could not be split into tokens.
- ConversionError (stage ``convert``): parentheses do not balance.
- EvalError (stage ``evaluate``): the postfix sequence could not be reduced
  to a single number.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar

from infixcalc.exceptions import InfixCalcError

__all__ = [
    "Stage",
    "CalculationErrorInfo",
    "CalculationError",
    "LexError",
    "UnexpectedCharacterError",
    "MalformedNumberError",
    "ConversionError",
    "UnbalancedParenthesesError",
    "EvalError",
    "MissingOperandError",
    "MalformedExpressionError",
    "NoResultError",
    "ExtraOperandsError",
    "NonFiniteResultError",
]


class Stage(str, Enum):
    """Pipeline stage in which an error occurred."""

    LEX = "lex"
    CONVERT = "convert"
    EVALUATE = "evaluate"


@dataclass(frozen=True, slots=True)
class CalculationErrorInfo:
    """Structured description of a failed calculation.

    Attributes:
        expression: The source text (empty if the failing stage never saw it).
        stage: Stage that raised the error.
        error: Exception class name, e.g. ``"MissingOperandError"``.
        message: Human-readable reason.
        position: Character position in the source, if known.
    """

    expression: str
    stage: Stage
    error: str
    message: str
    position: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["stage"] = self.stage.value
        return data


class CalculationError(InfixCalcError):
    """Base exception for every failure inside the expression pipeline.

    Attributes:
        message: Human-readable error message.
        expression: The source text, filled in by the calculator when known.
        position: Character position the error refers to, if any.
        stage: Pipeline stage (class-level, set by each subclass family).
    """

    stage: ClassVar[Stage]

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        position: int | None = None,
    ) -> None:
        self.expression = expression
        self.position = position
        super().__init__(message)

    def to_info(self) -> CalculationErrorInfo:
        """Snapshot this error as a CalculationErrorInfo."""
        return CalculationErrorInfo(
            expression=self.expression or "",
            stage=self.stage,
            error=type(self).__name__,
            message=self.message,
            position=self.position,
        )

    def pointer(self) -> str | None:
        """Render the expression with a caret under the failing position.

        Returns None when either the expression or the position is unknown.

        Example:
            >>> err = UnexpectedCharacterError("&", 2, expression="3 & 4")
            >>> print(err.pointer())
            3 & 4
              ^
        """
        if self.expression is None or self.position is None:
            return None
        return f"{self.expression}\n{' ' * self.position}^"


# =============================================================================
# Lexing
# =============================================================================


class LexError(CalculationError):
    """Raised when the input text cannot be tokenized."""

    stage = Stage.LEX


class UnexpectedCharacterError(LexError):
    """A character outside the expression grammar.

    Attributes:
        character: The offending character.
        position: Its index in the input.
    """

    def __init__(
        self,
        character: str,
        position: int,
        *,
        expression: str | None = None,
    ) -> None:
        self.character = character
        super().__init__(
            f"Unexpected character {character!r} at position {position}",
            expression=expression,
            position=position,
        )


class MalformedNumberError(LexError):
    """A run of digits, dots and minus signs that is not a valid float.

    Attributes:
        text: The literal as it appeared in the input (e.g. ``"1.2.3"``).
        position: Index of the literal's first character.
    """

    def __init__(
        self,
        text: str,
        position: int,
        *,
        expression: str | None = None,
    ) -> None:
        self.text = text
        super().__init__(
            f"Malformed number {text!r} at position {position}",
            expression=expression,
            position=position,
        )


# =============================================================================
# Conversion
# =============================================================================


class ConversionError(CalculationError):
    """Raised when infix tokens cannot be reordered into postfix."""

    stage = Stage.CONVERT


class UnbalancedParenthesesError(ConversionError):
    """A ``)`` without a matching ``(``, or a ``(`` that is never closed.

    Attributes:
        paren: The unmatched parenthesis character.
        position: Its index in the input.
    """

    def __init__(
        self,
        paren: str,
        position: int,
        *,
        expression: str | None = None,
    ) -> None:
        self.paren = paren
        kind = "closing" if paren == ")" else "opening"
        super().__init__(
            f"Unmatched {kind} parenthesis at position {position}",
            expression=expression,
            position=position,
        )


# =============================================================================
# Evaluation
# =============================================================================


class EvalError(CalculationError):
    """Raised when a postfix sequence cannot be evaluated."""

    stage = Stage.EVALUATE


class MissingOperandError(EvalError):
    """An operator found fewer than two values on the stack.

    Attributes:
        operator: The operator symbol that was starved.
        position: The operator's index in the input.
    """

    def __init__(
        self,
        operator: str,
        position: int,
        *,
        expression: str | None = None,
    ) -> None:
        self.operator = operator
        super().__init__(
            f"Operator {operator!r} at position {position} is missing an operand",
            expression=expression,
            position=position,
        )


class MalformedExpressionError(EvalError):
    """A grouping token reached the evaluator.

    Postfix never contains parentheses; seeing one means an unmatched ``(``
    was passed through by a lenient conversion.

    Attributes:
        token: The offending token rendered as text.
        position: Its index in the input.
    """

    def __init__(
        self,
        token: str,
        position: int,
        *,
        expression: str | None = None,
    ) -> None:
        self.token = token
        super().__init__(
            f"Unexpected {token!r} in postfix expression at position {position}",
            expression=expression,
            position=position,
        )


class NoResultError(EvalError):
    """Evaluation finished with an empty value stack."""

    def __init__(self, *, expression: str | None = None) -> None:
        super().__init__("Expression produced no result", expression=expression)


class ExtraOperandsError(EvalError):
    """Evaluation finished with more than one value on the stack.

    Attributes:
        count: Number of values left on the stack.
    """

    def __init__(self, count: int, *, expression: str | None = None) -> None:
        self.count = count
        super().__init__(
            f"Expression left {count} values; missing operator between operands",
            expression=expression,
        )


class NonFiniteResultError(EvalError):
    """An operation produced ``inf`` or ``nan`` while those are disallowed.

    Attributes:
        operator: The operator whose result was not finite.
        value: The non-finite result.
    """

    def __init__(
        self,
        operator: str,
        value: float,
        position: int,
        *,
        expression: str | None = None,
    ) -> None:
        self.operator = operator
        self.value = value
        super().__init__(
            f"Operator {operator!r} at position {position} produced non-finite "
            f"result {value}",
            expression=expression,
            position=position,
        )
