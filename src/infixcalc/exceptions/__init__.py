"""infixcalc exception hierarchy.

This package holds the root exception and the errors that are not tied to
the expression pipeline. Lexing, conversion and evaluation errors live in
``infixcalc.expressions.errors`` and all derive from InfixCalcError:

    from infixcalc.exceptions import ConfigError, InfixCalcError
"""

from __future__ import annotations

# Base exception
from infixcalc.exceptions.base import InfixCalcError

# Configuration exceptions
from infixcalc.exceptions.config import ConfigError

__all__ = [
    # Base
    "InfixCalcError",
    # Config
    "ConfigError",
]
