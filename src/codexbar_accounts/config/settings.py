"""Settings configuration for codexbar-accounts."""

import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from codexbar_accounts.config.discovery import (
    find_toml_config_file,
    get_accounts_dir,
    get_legacy_dirs,
    get_preferences_file,
)
from codexbar_accounts.exceptions import ConfigurationError


__all__ = [
    "Settings",
    "get_settings",
]


class Settings(BaseSettings):
    """
    Configuration settings for the Codex account store.

    Settings are loaded from environment variables (prefixed `CODEXBAR_`),
    .env files, and TOML configuration files.
    Environment variables take precedence over .env file values.
    TOML configuration files are looked up in the following order:
    1. .codexbar_accounts.toml in current directory
    2. codexbar_accounts.toml in current directory
    3. config.toml in user config directory/codexbar/ (platform-specific)
    """

    model_config = SettingsConfigDict(
        env_prefix="CODEXBAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    accounts_dir: Path = Field(
        default_factory=get_accounts_dir,
        description="Folder holding one subdirectory per account",
    )

    legacy_dirs: list[Path] = Field(
        default_factory=get_legacy_dirs,
        description="Single-account locations migrated on first run, in order",
    )

    preferences_file: Path = Field(
        default_factory=get_preferences_file,
        description="JSON file persisting the selected account id",
    )

    home_env_var: str = Field(
        default="CODEX_HOME",
        min_length=1,
        description="Environment variable pointing Codex at the active account",
    )

    log_level: str = Field(default="WARNING", description="Minimum log level")

    log_json: bool = Field(default=False, description="Emit JSON log lines")

    @field_validator("accounts_dir", "preferences_file", mode="after")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        return v.expanduser()

    @field_validator("legacy_dirs", mode="after")
    @classmethod
    def expand_paths(cls, v: list[Path]) -> list[Path]:
        return [path.expanduser() for path in v]

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @classmethod
    def load_toml_config(cls, toml_path: Path) -> dict[str, Any]:
        """Load configuration from a TOML file.

        Args:
            toml_path: Path to the TOML configuration file

        Returns:
            dict: Configuration data from the TOML file

        Raises:
            ValueError: If the TOML file is invalid or cannot be read
        """
        try:
            with toml_path.open("rb") as f:
                return tomllib.load(f)
        except OSError as e:
            raise ValueError(f"Cannot read TOML config file {toml_path}: {e}") from e
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid TOML syntax in {toml_path}: {e}") from e

    @classmethod
    def from_config(
        cls, config_path: Path | str | None = None, **kwargs: Any
    ) -> "Settings":
        """Create Settings instance from configuration file.

        Args:
            config_path: Path to configuration file. Can be:
                - None: Auto-discover config file or use CONFIG_FILE env var
                - Path or str: Use this specific config file
            **kwargs: Additional keyword arguments to override config values

        Returns:
            Settings: Configured Settings instance
        """
        if config_path is None:
            config_path_env = os.environ.get("CONFIG_FILE")
            if config_path_env:
                config_path = Path(config_path_env)

        if isinstance(config_path, str):
            config_path = Path(config_path)

        if config_path is None:
            config_path = find_toml_config_file()

        config_data = {}
        if config_path and config_path.exists():
            if config_path.suffix.lower() != ".toml":
                raise ValueError(
                    f"Unsupported config file format: {config_path.suffix}. "
                    "Only TOML (.toml) files are supported."
                )
            config_data = cls.load_toml_config(config_path)

        # kwargs take precedence over the file
        merged_config = {**config_data, **kwargs}
        return cls(**merged_config)


def get_settings(config_path: Path | str | None = None, **overrides: Any) -> Settings:
    """Load settings with configuration file support.

    Args:
        config_path: Optional path to configuration file. If None, uses CONFIG_FILE env var
                    or auto-discovers config file.
        **overrides: Values taking precedence over the configuration file

    Returns:
        Settings: Configured Settings instance

    Raises:
        ConfigurationError: If the configuration cannot be read or is invalid
    """
    try:
        return Settings.from_config(config_path=config_path, **overrides)
    except (OSError, ValueError) as e:
        # pydantic.ValidationError is a ValueError
        raise ConfigurationError(f"Failed to load configuration: {e}") from e
