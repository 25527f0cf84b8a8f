"""Platform paths and logging setup shared across codexbar-accounts."""

from codexbar_accounts.core.logging import setup_logging
from codexbar_accounts.core.system import (
    get_app_config_dir,
    get_app_data_dir,
    get_xdg_config_home,
    get_xdg_data_home,
)


__all__ = [
    "get_app_config_dir",
    "get_app_data_dir",
    "get_xdg_config_home",
    "get_xdg_data_home",
    "setup_logging",
]
