from __future__ import annotations

from typing import Any

from infixcalc.exceptions.base import InfixCalcError


class ConfigError(InfixCalcError):
    """Exception for configuration loading, parsing, and validation errors.

    Raised when configuration cannot be loaded, parsed, or validated. This
    includes YAML parsing failures, Pydantic validation errors, and invalid
    environment variable values.

    Attributes:
        message: Human-readable error message describing the configuration issue.
        field: Optional dotted field name that caused the error
            (e.g., "evaluation.strict_numbers").
        value: Optional value that failed validation (for debugging).

    Examples:
        ```python
        raise ConfigError(
            "Failed to parse infixcalc.yaml: invalid YAML syntax at line 3"
        )

        raise ConfigError(
            "Invalid configuration value",
            field="output.format",
            value="xml",
        )
        ```
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ) -> None:
        """Initialize the ConfigError.

        Args:
            message: Human-readable error message.
            field: Optional field name that caused the error.
            value: Optional value that failed validation.
        """
        self.field = field
        self.value = value
        super().__init__(message)
