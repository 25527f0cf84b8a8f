"""Startup sequence bringing the account store into a usable state."""

from dataclasses import dataclass, field
from enum import StrEnum

from structlog import get_logger

from codexbar_accounts.models import CodexAccount
from codexbar_accounts.store import CodexAccountStore


logger = get_logger(__name__)


class BootstrapStatus(StrEnum):
    """How a bootstrap run ended."""

    SKIPPED = "skipped"  # Codex home managed externally
    COMPLETED = "completed"
    UNAVAILABLE = "unavailable"  # accounts folder could not be created


@dataclass
class BootstrapResult:
    status: BootstrapStatus
    accounts: list[CodexAccount] = field(default_factory=list)
    selected_id: str | None = None


def bootstrap_if_needed(store: CodexAccountStore) -> BootstrapResult:
    """Prepare accounts and activate a selection at process start.

    Steps:
    1. Skip entirely when the Codex home variable is already set
    2. Ensure the accounts folder exists
    3. Load accounts, migrating legacy layouts when there are none
    4. Create one empty account if still none
    5. Reactivate the previous selection, or the first account

    Reactivation matters even when the selection is unchanged: the
    environment mirror does not survive a restart.

    Args:
        store: Account store to bootstrap

    Returns:
        BootstrapResult describing the outcome; never raises for
        filesystem failures
    """
    if store.has_external_home():
        logger.info("bootstrap_skipped_external_home", env_var=store.home_env_var)
        return BootstrapResult(status=BootstrapStatus.SKIPPED)

    if not store.ensure_base_dir():
        return BootstrapResult(status=BootstrapStatus.UNAVAILABLE)

    accounts = store.accounts()
    if not accounts:
        store.migrate_legacy_accounts()
        accounts = store.accounts()
    if not accounts:
        account = store.create_account()
        if account is not None:
            accounts = [account]

    selected = store.selected_account_id()
    if selected is not None and any(a.id == selected for a in accounts):
        store.activate_account(selected, accounts)
    elif accounts:
        store.activate_account(accounts[0].id, accounts)

    result = BootstrapResult(
        status=BootstrapStatus.COMPLETED,
        accounts=accounts,
        selected_id=store.selected_account_id(),
    )
    logger.info(
        "bootstrap_completed",
        count=len(accounts),
        selected=result.selected_id,
    )
    return result
