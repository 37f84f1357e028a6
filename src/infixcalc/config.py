from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from infixcalc.exceptions import ConfigError
from infixcalc.logging import get_logger

__all__ = [
    "InfixCalcConfig",
    "EvaluationConfig",
    "OutputConfig",
    "load_config",
    "get_user_config_path",
    "PROJECT_CONFIG_FILENAME",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "infixcalc.yaml"

# Project file chosen by load_config(); read by settings_customise_sources()
_project_config_override: ContextVar[Path | None] = ContextVar(
    "project_config_override", default=None
)


class EvaluationConfig(BaseModel):
    """How strictly ambiguous input is treated.

    Attributes:
        strict_numbers: Raise MalformedNumberError for literals such as
            ``1.2.3`` instead of silently dropping them.
        strict_parentheses: Raise UnbalancedParenthesesError for unmatched
            parentheses instead of tolerating them.
        reject_extra_operands: Raise ExtraOperandsError when values are left
            over (``(2)3``) instead of returning the last one.
        allow_non_finite: Let ``inf``/``nan`` through (``10 / 0``). When
            False such results raise NonFiniteResultError.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict_numbers: bool = True
    strict_parentheses: bool = True
    reject_extra_operands: bool = True
    allow_non_finite: bool = True

    @classmethod
    def lenient(cls) -> EvaluationConfig:
        """Settings that reproduce the original tolerant behavior."""
        return cls(
            strict_numbers=False,
            strict_parentheses=False,
            reject_extra_operands=False,
        )


class OutputConfig(BaseModel):
    """Settings for CLI output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    format: Literal["text", "json"] = "text"
    show_tokens: bool = False
    show_postfix: bool = False


class YamlConfigSource(PydanticBaseSettingsSource):
    """Settings source that reads one YAML file, if it exists."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {yaml_file}: {e}") from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    f"Config file {yaml_file} must contain a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class InfixCalcConfig(BaseSettings):
    """Root configuration object."""

    model_config = SettingsConfigDict(
        env_prefix="INFIXCALC_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    evaluation: EvaluationConfig = EvaluationConfig()
    output: OutputConfig = OutputConfig()
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Order the settings sources.

        Priority (highest to lowest):
        1. Explicit keyword arguments
        2. Environment variables (INFIXCALC_*)
        3. Project YAML config (./infixcalc.yaml or --config path)
        4. User YAML config (~/.config/infixcalc/config.yaml)
        5. Model defaults
        """
        project_config_path = (
            _project_config_override.get() or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/infixcalc/config.yaml
    """
    return Path.home() / ".config" / "infixcalc" / "config.yaml"


def load_config(config_path: Path | None = None) -> InfixCalcConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional project config file. Defaults to
            ./infixcalc.yaml. Unlike the default, an explicit path must exist.

    Returns:
        InfixCalcConfig with all sources merged.

    Raises:
        ConfigError: If a file is missing, unreadable or a value is invalid.
    """
    if config_path is not None and not config_path.exists():
        raise ConfigError(
            f"Config file not found: {config_path}",
            field="config",
            value=str(config_path),
        )

    token = _project_config_override.set(config_path)
    try:
        return InfixCalcConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_override.reset(token)
