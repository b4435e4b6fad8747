"""expbackoff configuration management using Pydantic."""

__all__ = [
    "BackoffConfig",
    "LoggingConfig",
    "ExpBackoffConfig",
]

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from expbackoff.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_INITIAL_DELAY_MILLIS,
    DEFAULT_MAX_DELAY_MILLIS,
    DEFAULT_MULTIPLIER,
)
from expbackoff.exceptions import ConfigurationError
from expbackoff.retry_backoff import ExponentialBackoff, ExponentialBackoffBuilder

logger = logging.getLogger(__name__)


class BackoffConfig(BaseModel):
    """Exponential backoff parameters."""

    initial_delay_millis: int = Field(
        default=DEFAULT_INITIAL_DELAY_MILLIS,
        ge=0,
        description="Delay in milliseconds before the first retry",
    )
    max_delay_millis: int = Field(
        default=DEFAULT_MAX_DELAY_MILLIS,
        ge=0,
        description="Upper bound in milliseconds on any computed delay",
    )
    multiplier: float = Field(
        default=DEFAULT_MULTIPLIER,
        gt=1.0,
        description="Growth factor applied per attempt",
    )

    def to_backoff(self) -> ExponentialBackoff:
        """Build the policy described by this configuration.

        Returns:
            ExponentialBackoff instance

        Raises:
            InvalidArgumentError: If the initial delay exceeds the maximum delay
        """
        return (
            ExponentialBackoffBuilder()
            .max_delay_millis(self.max_delay_millis)
            .initial_delay_millis(self.initial_delay_millis)
            .multiplier(self.multiplier)
            .build()
        )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="info", pattern="^(debug|info|warn|error)$")
    directory: str | None = None
    structured_output: bool = True


class ExpBackoffConfig(BaseModel):
    """Complete expbackoff configuration."""

    backoff: BackoffConfig = Field(default_factory=BackoffConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "ExpBackoffConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Defaults to .expbackoff/config.yaml

        Returns:
            ExpBackoffConfig instance; defaults when the file does not exist

        Raises:
            ConfigurationError: If the file cannot be read or is not a YAML mapping
        """
        config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)

        if not config_path.exists():
            logger.debug(f"No config at {config_path}, using defaults", extra={"config_path": str(config_path)})
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read config: {e}", config_path=str(config_path)) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config must be a YAML mapping",
                config_path=str(config_path),
                details={"type": type(data).__name__},
            )

        logger.info(f"Loaded config from {config_path}", extra={"config_path": str(config_path)})
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExpBackoffConfig":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            ExpBackoffConfig instance
        """
        return cls(**data)

    def save(self, config_path: str | Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Defaults to .expbackoff/config.yaml
        """
        config_path = DEFAULT_CONFIG_PATH if config_path is None else Path(config_path)

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()
