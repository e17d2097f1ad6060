"""flattree Settings Configuration Model.

Settings consolidate flatten defaults and logging configuration. Values come
from (highest priority first) explicit keyword arguments or a TOML file,
``FLATTREE_`` environment variables, then the defaults below. CLI flags
override whatever the settings say.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from flattree.core.models import MatchMode
from flattree.shared.constants import Application, Logging
from flattree.shared.errors import ErrorCode, create_configuration_error

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FlattenSettings(BaseModel):
    """Flatten defaults.

    Include and exclude patterns are mutually exclusive, as on the
    command line.
    """

    max_depth: int | None = Field(
        default=None,
        ge=0,
        description="Maximum traversal depth (None = unlimited)",
    )
    match_mode: MatchMode = Field(
        default=MatchMode.SUBSTRING,
        description="Pattern semantics for top-level directory names",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Only flatten top-level directories matching these patterns",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Skip top-level directories matching these patterns",
    )
    assume_yes: bool = Field(
        default=False,
        description="Skip the confirmation prompt",
    )

    @field_validator("include", "exclude")
    @classmethod
    def _reject_blank_patterns(cls, value: list[str]) -> list[str]:
        if value and not any(item.strip() for item in value):
            msg = "pattern list must contain at least one non-blank pattern"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _check_filters(self) -> FlattenSettings:
        if self.include and self.exclude:
            msg = "include and exclude patterns cannot be used together"
            raise ValueError(msg)
        return self


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = Field(default=Logging.DEFAULT_LEVEL, description="Logging level")
    file: str | None = Field(default=None, description="Optional JSON log file path")
    max_bytes: int = Field(
        default=Logging.MAX_BYTES,
        gt=0,
        description="Maximum log file size in bytes",
    )
    backup_count: int = Field(
        default=Logging.BACKUP_COUNT,
        ge=0,
        description="Number of backup log files to keep",
    )
    console_output: bool = Field(default=True, description="Enable console logging")

    @field_validator("level")
    @classmethod
    def _normalise_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            msg = f"log level must be one of {', '.join(_LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level


class Settings(BaseSettings):
    """Unified configuration access for flattree."""

    model_config = SettingsConfigDict(
        env_prefix=Application.ENV_PREFIX,
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    flatten: FlattenSettings = Field(default_factory=FlattenSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        file_path = Path(file_path)
        if not file_path.is_file():
            raise create_configuration_error(
                f"Configuration file not found: {file_path}",
                code=ErrorCode.CONFIG_NOT_FOUND,
                path=file_path,
            )

        try:
            raw_config = toml.load(file_path)
        except (OSError, toml.TomlDecodeError) as e:
            raise create_configuration_error(
                f"Cannot parse configuration file {file_path}: {e}",
                code=ErrorCode.INVALID_CONFIG,
                path=file_path,
                original_error=e,
            ) from e

        logger.debug("Loaded configuration from %s", file_path)
        return _build_settings(raw_config, source=file_path)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to a TOML file."""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump(mode="json", exclude_none=True)
        with file_path.open("w", encoding="utf-8") as f:
            toml.dump(data, f)


def _build_settings(raw_config: dict[str, Any], source: Path | None = None) -> Settings:
    try:
        return Settings(**raw_config)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        raise create_configuration_error(
            f"Invalid configuration: {first.get('msg', e)}"
            + (f" ({location})" if location else ""),
            code=ErrorCode.INVALID_CONFIG,
            path=source,
            config_key=location or None,
            original_error=e,
        ) from e


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from a TOML file, or defaults plus environment.

    Args:
        config_path: Optional TOML settings file

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If the file or the environment holds invalid values
    """
    if config_path is not None:
        return Settings.from_toml_file(config_path)
    return _build_settings({})


__all__ = [
    "FlattenSettings",
    "LoggingSettings",
    "Settings",
    "load_settings",
]
