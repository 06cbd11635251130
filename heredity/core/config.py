"""Configuration management for heredity."""

from __future__ import annotations

from enum import StrEnum
import logging
import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from heredity.core.exceptions import ConfigurationError


class DuplicateMixinPolicy(StrEnum):
    """What to record when the same mixin is applied to an instance twice."""

    APPEND = "append"
    IGNORE = "ignore"
    ERROR = "error"


class TraceConfig(BaseSettings):
    """
    Trace Controller Configuration.

    Controls collection of execution markers from the hub and composers.
    """

    enabled: bool = Field(
        default=False, description="Collect trace markers (True=tests/debug, False=production)"
    )
    max_events: int = Field(
        default=10000, ge=0, description="Max markers to keep in memory (0=unlimited)"
    )

    model_config = SettingsConfigDict(
        env_prefix="HEREDITY_TRACE_",
        extra="ignore",
    )


class HeredityConfig(BaseSettings):
    """
    Configuration for heredity.

    Can be loaded from:
    - Environment variables (prefix: HEREDITY_)
    - YAML file
    - Direct initialization

    Example:
        >>> config = HeredityConfig(duplicate_mixins="ignore")
        >>> config = HeredityConfig.from_yaml("heredity.yaml")
        >>> config = HeredityConfig()
    """

    model_config = SettingsConfigDict(
        env_prefix="HEREDITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    guid_start: int = Field(
        default=1,
        ge=0,
        description="First guid handed out by a fresh identity provider",
    )
    duplicate_mixins: DuplicateMixinPolicy = Field(
        default=DuplicateMixinPolicy.APPEND,
        description="Policy for re-applying a mixin to the same instance (append, ignore, error)",
    )
    inherited_event: str = Field(
        default="inherited",
        min_length=1,
        description="Event type dispatched on a parent class when a subclass is wired to it",
    )
    log_level: str = Field(
        default="WARNING",
        description="Level for the 'heredity' logger",
    )
    trace: TraceConfig = Field(default_factory=TraceConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is a name the logging module knows."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @classmethod
    def find_config_yaml(cls) -> Path | None:
        """
        Search for heredity.yaml in standard locations.

        Search order:
        1. Current working directory
        2. Project root (parent of heredity package)
        3. User home directory

        Returns:
            Path to heredity.yaml if found, None otherwise
        """
        search_paths = [
            Path.cwd() / "heredity.yaml",
            Path(__file__).parent.parent.parent / "heredity.yaml",
            Path.home() / ".heredity" / "heredity.yaml",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> HeredityConfig:
        """
        Load configuration from YAML file.

        Environment variables win over values found in the file.

        Args:
            path: Path to YAML configuration file. If None, searches standard locations.

        Returns:
            HeredityConfig instance

        Raises:
            FileNotFoundError: If no file is found
            ConfigurationError: If the file does not hold a mapping
        """
        if path is None:
            path = cls.find_config_yaml()
            if path is None:
                raise FileNotFoundError(
                    "Config file not found. Searched:\n"
                    "  1. ./heredity.yaml\n"
                    "  2. <project_root>/heredity.yaml\n"
                    "  3. ~/.heredity/heredity.yaml"
                )
        else:
            path = Path(path)
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        result_data = {}

        for key, value in yaml_data.items():
            env_key = f"HEREDITY_{key.upper()}"
            if env_key in os.environ:
                continue
            result_data[key] = value

        return cls(**result_data)

    def to_yaml(self, path: Path | str) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save YAML configuration
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def __repr__(self) -> str:
        return (
            f"HeredityConfig(guid_start={self.guid_start}, "
            f"duplicate_mixins={self.duplicate_mixins.value!r}, log_level={self.log_level!r})"
        )


def configure_logging(config: HeredityConfig | None = None) -> logging.Logger:
    """Apply the configured level to the package logger and return it."""
    config = config or HeredityConfig()
    package_logger = logging.getLogger("heredity")
    package_logger.setLevel(config.log_level)
    return package_logger
