"""Tests for the Calculator facade and the calculate() entry point.

These run the whole tokenize -> to_postfix -> evaluate pipeline.
"""

from __future__ import annotations

import math

import pytest

from infixcalc import CalculationResult, Calculator, calculate
from infixcalc.config import EvaluationConfig
from infixcalc.expressions.errors import (
    CalculationError,
    ExtraOperandsError,
    MalformedExpressionError,
    MalformedNumberError,
    MissingOperandError,
    NonFiniteResultError,
    NoResultError,
    Stage,
    UnbalancedParenthesesError,
    UnexpectedCharacterError,
)
from infixcalc.expressions.tokens import Number, Operator, format_tokens


class TestCalculateValues:
    """End-to-end results for well-formed expressions."""

    @pytest.mark.parametrize(
        ("expression", "expected"),
        [
            ("3 + 4 * 2", 11.0),
            ("(1 + 2) * 3", 9.0),
            ("2 ^ 3 ^ 2", 512.0),
            ("(2 ^ 3) ^ 2", 64.0),
            ("-5 + 3", -2.0),
            ("10 - 4 - 3", 3.0),
            ("100 / 10 / 5", 2.0),
            ("2 * -3", -6.0),
            ("3 - -5", 8.0),
            ("-2 ^ 2", 4.0),
            ("2 ^ -1", 0.5),
            ("1.5 * 4", 6.0),
            ("((7))", 7.0),
            ("(1 + 2) * (3 + 4) / 7", 3.0),
        ],
    )
    def test_result(self, expression: str, expected: float) -> None:
        """Precedence and associativity match standard arithmetic."""
        assert calculate(expression) == pytest.approx(expected)

    def test_matches_python_arithmetic(self) -> None:
        """A mixed expression agrees with Python's own evaluation."""
        assert calculate("1 + 2 * 3 - 4 / 8 ^ 2") == pytest.approx(
            1 + 2 * 3 - 4 / 8**2
        )

    def test_division_by_zero_is_infinity_by_default(self) -> None:
        """'10 / 0' returns inf unless non-finite results are disallowed."""
        assert calculate("10 / 0") == math.inf

    def test_division_by_zero_rejected_when_finite_only(self) -> None:
        """With allow_non_finite=False, '10 / 0' raises."""
        options = EvaluationConfig(allow_non_finite=False)
        with pytest.raises(NonFiniteResultError):
            calculate("10 / 0", options=options)


class TestCalculateErrors:
    """Each failure surfaces as a typed error from the right stage."""

    def test_missing_operand(self) -> None:
        """'2 +' is missing its right operand."""
        with pytest.raises(MissingOperandError) as exc_info:
            calculate("2 +")
        assert exc_info.value.stage is Stage.EVALUATE
        assert exc_info.value.expression == "2 +"

    def test_unexpected_character(self) -> None:
        """'3 & 4' identifies the '&'."""
        with pytest.raises(UnexpectedCharacterError) as exc_info:
            calculate("3 & 4")
        assert exc_info.value.character == "&"
        assert exc_info.value.stage is Stage.LEX

    def test_empty_expression(self) -> None:
        """Nothing to evaluate is NoResultError."""
        with pytest.raises(NoResultError):
            calculate("   ")

    @pytest.mark.parametrize(
        ("expression", "error"),
        [
            ("1.2.3 + 1", MalformedNumberError),
            ("(1 + 2", UnbalancedParenthesesError),
            ("1 + 2)", UnbalancedParenthesesError),
            ("(2)3", ExtraOperandsError),
            ("1 2", ExtraOperandsError),
        ],
    )
    def test_strict_by_default(
        self, expression: str, error: type[CalculationError]
    ) -> None:
        """Ambiguous input raises by default."""
        with pytest.raises(error):
            calculate(expression)

    def test_conversion_error_gets_expression(self) -> None:
        """The calculator attaches the source text to errors from every stage."""
        with pytest.raises(UnbalancedParenthesesError) as exc_info:
            calculate("2 * (1 + 2")
        assert exc_info.value.expression == "2 * (1 + 2"
        assert exc_info.value.pointer() == "2 * (1 + 2\n    ^"


class TestLenientCalculation:
    """The tolerant behavior available through EvaluationConfig.lenient()."""

    @pytest.fixture
    def calculator(self) -> Calculator:
        return Calculator(EvaluationConfig.lenient())

    def test_malformed_number_dropped(self, calculator: Calculator) -> None:
        """'1.2.3 + 1' drops the bad literal; '+' is then missing an operand."""
        with pytest.raises(MissingOperandError):
            calculator.calculate("1.2.3 + 1")

    def test_stray_closing_paren_ignored(self, calculator: Calculator) -> None:
        """'1 + 2)' evaluates to 3."""
        assert calculator.calculate("1 + 2)") == 3.0

    def test_unclosed_paren_is_malformed(self, calculator: Calculator) -> None:
        """'(1 + 2' reaches the evaluator with a '(' and fails there."""
        with pytest.raises(MalformedExpressionError):
            calculator.calculate("(1 + 2")

    def test_extra_operands_last_wins(self, calculator: Calculator) -> None:
        """'(2)3' returns the last value."""
        assert calculator.calculate("(2)3") == 3.0

    def test_spaced_digits_form_one_number(self, calculator: Calculator) -> None:
        """'1 2' reads as 12 rather than two operands."""
        assert calculator.calculate("1 2") == 12.0

    def test_lenient_keeps_non_finite_allowed(self, calculator: Calculator) -> None:
        """Leniency does not change IEEE behavior."""
        assert calculator.calculate("1 / 0") == math.inf


class TestCalculatorRun:
    """Test the CalculationResult returned by run()."""

    def test_run_exposes_intermediate_sequences(self) -> None:
        """run() returns both token sequences and the value."""
        result = Calculator().run("3 + 4 * 2")

        assert isinstance(result, CalculationResult)
        assert result.expression == "3 + 4 * 2"
        assert result.tokens == (
            Number(3.0),
            Operator("+"),
            Number(4.0),
            Operator("*"),
            Number(2.0),
        )
        assert format_tokens(result.postfix) == "3 4 2 * +"
        assert result.value == 11.0

    def test_to_dict(self) -> None:
        """to_dict renders tokens as strings."""
        result = Calculator().run("(1 + 2) * 3")
        assert result.to_dict() == {
            "expression": "(1 + 2) * 3",
            "tokens": ["(", "1", "+", "2", ")", "*", "3"],
            "postfix": "1 2 + 3 *",
            "result": 9.0,
        }

    def test_default_options_are_strict(self) -> None:
        """A bare Calculator uses strict settings."""
        options = Calculator().options
        assert options.strict_numbers
        assert options.strict_parentheses
        assert options.reject_extra_operands
        assert options.allow_non_finite

    def test_stages_use_options(self) -> None:
        """The per-stage methods honour the configured options."""
        calculator = Calculator(EvaluationConfig(strict_numbers=False))
        assert calculator.tokenize("1.2.3") == []

    def test_calculator_is_reusable(self) -> None:
        """One instance evaluates many expressions independently."""
        calculator = Calculator()
        assert calculator.calculate("1 + 1") == 2.0
        with pytest.raises(MissingOperandError):
            calculator.calculate("*")
        assert calculator.calculate("2 * 2") == 4.0
