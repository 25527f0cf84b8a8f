"""Configuration module for codexbar-accounts."""

from codexbar_accounts.exceptions import ConfigurationError

from .settings import Settings, get_settings


__all__ = [
    "ConfigurationError",
    "Settings",
    "get_settings",
]
