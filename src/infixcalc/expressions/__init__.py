"""Arithmetic expression pipeline.

Three pure stages, each consuming the previous stage's output:

    text --tokenize()--> infix tokens --to_postfix()--> postfix tokens
         --evaluate()--> float

Supported syntax
----------------
- Decimal literals: ``42``, ``3.14``, ``.5``
- Negative literals where an operand is expected: ``-5 + 3``, ``2 * -3``
- Binary operators ``+ - * / ^`` with the usual precedence; ``^`` is
  right-associative
- Parentheses for grouping

Module Structure
----------------
- tokens.py: Token dataclasses (Number, Operator, LParen, RParen)
- operators.py: Precedence/associativity table and IEEE arithmetic
- lexer.py: tokenize()
- converter.py: to_postfix() (shunting-yard)
- evaluator.py: evaluate()
- errors.py: Stage-tagged error hierarchy

No stage keeps state between calls, so all of them are thread-safe.
"""

from __future__ import annotations

from infixcalc.expressions.converter import to_postfix
from infixcalc.expressions.errors import (
    CalculationError,
    CalculationErrorInfo,
    ConversionError,
    EvalError,
    ExtraOperandsError,
    LexError,
    MalformedExpressionError,
    MalformedNumberError,
    MissingOperandError,
    NonFiniteResultError,
    NoResultError,
    Stage,
    UnbalancedParenthesesError,
    UnexpectedCharacterError,
)
from infixcalc.expressions.evaluator import evaluate
from infixcalc.expressions.lexer import tokenize
from infixcalc.expressions.operators import (
    OPERATORS,
    Associativity,
    OperatorSpec,
    get_operator,
)
from infixcalc.expressions.tokens import (
    LParen,
    Number,
    Operator,
    RParen,
    Token,
    format_tokens,
)

__all__: list[str] = [
    # Tokens
    "Token",
    "Number",
    "Operator",
    "LParen",
    "RParen",
    "format_tokens",
    # Operators
    "OPERATORS",
    "Associativity",
    "OperatorSpec",
    "get_operator",
    # Stages
    "tokenize",
    "to_postfix",
    "evaluate",
    # Errors
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
