from __future__ import annotations


class InfixCalcError(Exception):
    """Base exception class for all infixcalc-specific errors.

    This is the root of the infixcalc exception hierarchy. Catching it at the
    CLI boundary handles every expected failure (bad input, bad configuration)
    while letting programming errors propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            value = calculate(line)
        except InfixCalcError as e:
            logger.error("calculation_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the InfixCalcError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
