"""Multi-account store for Codex credentials.

Each account lives in its own directory under the accounts folder; the
directory name is the account id. The selected account is persisted as a
user preference and mirrored into `CODEX_HOME` so Codex CLI subprocesses
read that account's credentials.
"""

import uuid
from collections.abc import Sequence
from pathlib import Path

from structlog import get_logger

from codexbar_accounts.config.settings import Settings
from codexbar_accounts.environment import Environment, ProcessEnvironment
from codexbar_accounts.migration import migrate_legacy_accounts
from codexbar_accounts.models import AccountInfo, CodexAccount
from codexbar_accounts.preferences import JsonFilePreferenceStore, PreferenceStore
from codexbar_accounts.profile import load_account_info
from codexbar_accounts.scanner import load_accounts


logger = get_logger(__name__)

ACCOUNT_SELECTION_KEY = "codexAccountID"
DEFAULT_HOME_ENV_VAR = "CODEX_HOME"


class CodexAccountStore:
    """Owns the accounts folder and the selected-account preference.

    Not thread-safe: all calls are expected from one control thread.
    """

    def __init__(
        self,
        base_dir: Path,
        *,
        preferences: PreferenceStore,
        environment: Environment,
        legacy_dirs: Sequence[Path] = (),
        home_env_var: str = DEFAULT_HOME_ENV_VAR,
    ) -> None:
        """Initialize the store.

        Args:
            base_dir: Folder holding one subdirectory per account
            preferences: Backend persisting the selected account id
            environment: Environment receiving the active account path
            legacy_dirs: Single-account locations consulted by migration
            home_env_var: Name of the mirrored environment variable

        """
        self.base_dir = base_dir
        self.preferences = preferences
        self.environment = environment
        self.legacy_dirs = list(legacy_dirs)
        self.home_env_var = home_env_var

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        preferences: PreferenceStore | None = None,
        environment: Environment | None = None,
    ) -> "CodexAccountStore":
        """Build the store from application settings."""
        return cls(
            settings.accounts_dir,
            preferences=preferences or JsonFilePreferenceStore(settings.preferences_file),
            environment=environment or ProcessEnvironment(),
            legacy_dirs=settings.legacy_dirs,
            home_env_var=settings.home_env_var,
        )

    # Reads

    def accounts(self) -> list[CodexAccount]:
        """List accounts in display order, including an empty selected account."""
        return load_accounts(self.base_dir, self.selected_account_id())

    def account(self, account_id: str | None) -> CodexAccount | None:
        if account_id is None:
            return None
        return next((a for a in self.accounts() if a.id == account_id), None)

    def selected_account_id(self) -> str | None:
        return self.preferences.get_string(ACCOUNT_SELECTION_KEY)

    def selected_account(self) -> CodexAccount | None:
        return self.account(self.selected_account_id())

    def account_info(self, account_id: str | None) -> AccountInfo | None:
        """Derive email and plan for an account, None if unknown or unreadable."""
        account = self.account(account_id)
        if account is None:
            return None
        return load_account_info(account.path)

    def selected_account_info(self) -> AccountInfo | None:
        return self.account_info(self.selected_account_id())

    def codex_home(self) -> Path | None:
        """Directory of the selected account, resolved from the preference."""
        account = self.selected_account()
        return account.path if account else None

    def has_external_home(self) -> bool:
        """Check whether the Codex home is managed outside this store."""
        value = self.environment.get(self.home_env_var)
        return bool(value and value.strip())

    # Writes

    def ensure_base_dir(self) -> bool:
        """Create the accounts folder if missing.

        Returns:
            True if the folder exists afterwards
        """
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(
                "accounts_dir_create_failed", path=str(self.base_dir), error=str(e)
            )
            return False
        return True

    def create_account(self) -> CodexAccount | None:
        """Create an empty account directory with a fresh id.

        Returns:
            The new account, or None if the directory could not be created
        """
        account_id = str(uuid.uuid4()).lower()
        path = self.base_dir / account_id
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("account_dir_create_failed", path=str(path), error=str(e))
            return None

        logger.info("account_created", account=account_id, path=str(path))
        return CodexAccount(id=account_id, email=None, path=path)

    def activate_account(
        self,
        account_id: str,
        accounts: Sequence[CodexAccount] | None = None,
    ) -> bool:
        """Make an account the selected one.

        The id is resolved against `accounts` first and then against a fresh
        scan. An id that resolves to no account leaves the selection as is.

        Args:
            account_id: Account to select
            accounts: Candidate accounts already in hand

        Returns:
            True if the account is now selected and mirrored
        """
        account = next((a for a in accounts or () if a.id == account_id), None)
        if account is None:
            account = self.account(account_id)
        if account is None:
            logger.debug("account_activation_unresolved", account=account_id)
            return False

        # The environment only follows a persisted selection
        if not self.preferences.set_string(ACCOUNT_SELECTION_KEY, account.id):
            logger.error("account_activation_not_persisted", account=account.id)
            return False

        self.environment.set(self.home_env_var, str(account.path))
        logger.info(
            "account_activated",
            account=account.id,
            path=str(account.path),
            preferences=self.preferences.get_location(),
        )
        return True

    def create_account_and_activate(self) -> CodexAccount | None:
        account = self.create_account()
        if account is None:
            return None
        self.activate_account(account.id, [account])
        return account

    def migrate_legacy_accounts(self) -> list[CodexAccount]:
        """Import legacy single-account layouts, only while no account exists.

        Returns:
            Accounts created by the migration; empty when accounts already exist
        """
        if self.accounts():
            return []
        return migrate_legacy_accounts(self.legacy_dirs, self.create_account)
