"""Configuration management for endpoint and paging settings.

Loads configuration from environment variables and an optional YAML file.
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://graphql.mainnet.sui.io/graphql"
MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class SnapshotConfig:
    """Settings for a snapshot run."""

    # Sui GraphQL indexer
    endpoint: str = DEFAULT_ENDPOINT
    page_size: int = MAX_PAGE_SIZE
    timeout_seconds: float = 30.0

    # Request pacing (never retries)
    rate_limit_calls: int = 600
    rate_limit_period: int = 60

    # Where the report is written
    output_path: Path = Path("holders.csv")

    def __post_init__(self) -> None:
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ConfigurationError(
                "page_size", f"must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}"
            )
        if self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds", "must be positive")
        for name in ("rate_limit_calls", "rate_limit_period"):
            if getattr(self, name) < 1:
                raise ConfigurationError(name, f"must be at least 1, got {getattr(self, name)}")

    @classmethod
    def from_env(cls) -> "SnapshotConfig":
        """Load configuration from environment variables."""
        overrides: dict[str, Any] = {}
        if endpoint := os.getenv("SUI_GRAPHQL_ENDPOINT"):
            overrides["endpoint"] = endpoint
        if page_size := os.getenv("SNAPSHOT_PAGE_SIZE"):
            overrides["page_size"] = _coerce("page_size", page_size, int)
        if timeout := os.getenv("SNAPSHOT_TIMEOUT"):
            overrides["timeout_seconds"] = _coerce("timeout_seconds", timeout, float)
        if output := os.getenv("SNAPSHOT_OUTPUT"):
            overrides["output_path"] = Path(output)
        return cls(**overrides)

    @classmethod
    def load(cls, config_file: Optional[Path] = None) -> "SnapshotConfig":
        """
        Load configuration from environment variables and a YAML file.

        Args:
            config_file: Optional YAML settings file. Values found there
                         override the environment.

        Returns:
            SnapshotConfig instance with loaded values
        """
        config = cls.from_env()
        if config_file is None:
            return config

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigurationError("config_file", f"not found: {config_file}")
        except yaml.YAMLError as e:
            raise ConfigurationError("config_file", f"invalid YAML in {config_file}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError("config_file", f"{config_file} must contain a mapping")

        logger.debug(f"Loaded settings from {config_file}")
        return config.with_overrides(**data)

    def with_overrides(self, **values: Any) -> "SnapshotConfig":
        """Return a copy with the given non-None values applied."""
        known = {f.name for f in fields(self)}
        updates: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if key not in known:
                logger.warning(f"Ignoring unknown setting: {key}")
                continue
            if key == "output_path":
                value = Path(value)
            elif key == "page_size":
                value = _coerce(key, value, int)
            elif key == "timeout_seconds":
                value = _coerce(key, value, float)
            elif key in ("rate_limit_calls", "rate_limit_period"):
                value = _coerce(key, value, int)
            updates[key] = value
        return replace(self, **updates)


def _coerce(key: str, value: Any, kind: type) -> Any:
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigurationError(key, f"expected {kind.__name__}, got {value!r}")


# Global config instance (lazy loaded)
_config: Optional[SnapshotConfig] = None


def get_config() -> SnapshotConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = SnapshotConfig.load()
    return _config


def reload_config(config_file: Optional[Path] = None) -> SnapshotConfig:
    """Reload configuration from environment and optional settings file."""
    global _config
    _config = SnapshotConfig.load(config_file)
    return _config
