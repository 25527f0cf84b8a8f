"""One-time migration of single-account Codex layouts into account folders."""

import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

from structlog import get_logger

from codexbar_accounts.models import CodexAccount
from codexbar_accounts.profile import AUTH_FILE_NAME, CREDENTIALS_FILE_NAME, load_email
from codexbar_accounts.scanner import has_stored_credentials


logger = get_logger(__name__)

MIGRATED_FILE_NAMES = (AUTH_FILE_NAME, CREDENTIALS_FILE_NAME)


def copy_if_exists(source: Path, destination: Path) -> bool:
    """Copy `source` to `destination` unless source is missing or destination exists.

    Returns:
        True if the file was copied
    """
    try:
        if not source.exists() or destination.exists():
            return False
        shutil.copy2(source, destination)
    except OSError as e:
        # OSError: permissions or disk full
        logger.error(
            "legacy_file_copy_failed",
            file=source.name,
            source=str(source),
            destination=str(destination),
            error=str(e),
        )
        return False
    return True


def migrate_legacy_accounts(
    legacy_dirs: Iterable[Path],
    create_account: Callable[[], CodexAccount | None],
) -> list[CodexAccount]:
    """Copy credentials from legacy single-account locations into new accounts.

    Each legacy location holding credentials gets its own freshly created
    account. Existing files in the new account are never overwritten, and a
    file that fails to copy does not stop the rest of the migration.

    Args:
        legacy_dirs: Legacy locations, in the order they should be migrated
        create_account: Factory creating an empty account directory

    Returns:
        The accounts created by the migration
    """
    migrated: list[CodexAccount] = []

    for legacy in legacy_dirs:
        if not has_stored_credentials(legacy):
            continue

        account = create_account()
        if account is None:
            logger.warning("legacy_migration_skipped", legacy=str(legacy))
            continue

        for name in MIGRATED_FILE_NAMES:
            copy_if_exists(legacy / name, account.path / name)

        email = load_email(account.path)
        if email:
            logger.info("legacy_account_migrated", legacy=str(legacy), email=email)
        else:
            logger.info("legacy_account_migrated", legacy=str(legacy), account=account.id)
        migrated.append(account.model_copy(update={"email": email}))

    return migrated
