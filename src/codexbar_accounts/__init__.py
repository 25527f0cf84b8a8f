"""codexbar-accounts - Multi-account credential store for the Codex CLI."""

from ._version import __version__
from .bootstrap import BootstrapResult, BootstrapStatus, bootstrap_if_needed
from .models import AccountInfo, CodexAccount
from .store import CodexAccountStore


__all__ = [
    "AccountInfo",
    "BootstrapResult",
    "BootstrapStatus",
    "CodexAccount",
    "CodexAccountStore",
    "__version__",
    "bootstrap_if_needed",
]
