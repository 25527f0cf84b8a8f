"""Discovery of account directories under the accounts folder."""

from pathlib import Path

from structlog import get_logger

from codexbar_accounts.models import CodexAccount
from codexbar_accounts.profile import AUTH_FILE_NAME, CREDENTIALS_FILE_NAME, load_email


logger = get_logger(__name__)


def has_stored_credentials(directory: Path) -> bool:
    """Check whether a directory holds an auth or credentials file.

    A directory that cannot be searched counts as holding none.
    """
    try:
        return (directory / AUTH_FILE_NAME).exists() or (
            directory / CREDENTIALS_FILE_NAME
        ).exists()
    except OSError as e:
        logger.debug("credentials_check_failed", path=str(directory), error=str(e))
        return False


def account_sort_key(account: CodexAccount) -> tuple[bool, str, str]:
    """Order by lowercased email, accounts without email last, then by id."""
    email = account.email.lower() if account.email else ""
    return (account.email is None, email, account.id)


def load_accounts(base_dir: Path, selected_id: str | None = None) -> list[CodexAccount]:
    """List the accounts stored under `base_dir`.

    A subdirectory counts as an account when it holds stored credentials.
    The selected account is listed even while still empty, so a freshly
    created account stays visible until its login completes.

    Args:
        base_dir: Accounts folder
        selected_id: Currently selected account id, if any

    Returns:
        Accounts in display order; empty if the folder cannot be listed
    """
    try:
        entries = list(base_dir.iterdir())
    except OSError as e:
        logger.debug("accounts_dir_unlistable", path=str(base_dir), error=str(e))
        return []

    accounts: list[CodexAccount] = []
    for entry in entries:
        if entry.name.startswith("."):
            continue
        try:
            if not entry.is_dir():
                continue
        except OSError:
            continue
        if not (has_stored_credentials(entry) or entry.name == selected_id):
            continue
        accounts.append(CodexAccount(id=entry.name, email=load_email(entry), path=entry))

    accounts.sort(key=account_sort_key)
    return accounts
