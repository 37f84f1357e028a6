"""infixcalc - arithmetic expression evaluator.

Parses infix expressions such as ``(1 + 2) * 3`` with a shunting-yard
converter and evaluates the resulting postfix sequence.
"""

from __future__ import annotations

from infixcalc.calculator import CalculationResult, Calculator, calculate
from infixcalc.expressions import evaluate, to_postfix, tokenize

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CalculationResult",
    "Calculator",
    "calculate",
    "tokenize",
    "to_postfix",
    "evaluate",
]
