from pathlib import Path

from codexbar_accounts.core.system import get_app_config_dir, get_app_data_dir


def find_toml_config_file() -> Path | None:
    """Find the TOML configuration file for codexbar-accounts.

    Searches in the following order:
    1. .codexbar_accounts.toml in current directory
    2. codexbar_accounts.toml in current directory
    3. config.toml in the user config directory/codexbar/ (platform-specific)
    """
    candidates = [
        Path(".codexbar_accounts.toml").resolve(),
        Path("codexbar_accounts.toml").resolve(),
        get_app_config_dir() / "config.toml",
    ]

    for candidate in candidates:
        if candidate.exists() and candidate.is_file():
            return candidate

    return None


def get_accounts_dir() -> Path:
    """Get the folder holding one subdirectory per account."""
    return get_app_data_dir() / "codex-accounts"


def get_legacy_dirs() -> list[Path]:
    """Get the single-account locations consulted by the legacy migration.

    Returns:
        The previous application layout, then the Codex CLI default home.
    """
    return [
        get_app_data_dir() / "codex",
        Path.home() / ".codex",
    ]


def get_preferences_file() -> Path:
    """Get the JSON file holding per-user preferences."""
    return get_app_config_dir() / "preferences.json"
