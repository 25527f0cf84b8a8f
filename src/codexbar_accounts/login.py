"""Login hand-off: where a Codex login writes, and how its outcome is recorded.

Running `codex login` itself is left to the caller. The store only names the
directory the login should target and logs the result afterwards.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from structlog import get_logger

from codexbar_accounts.store import CodexAccountStore


logger = get_logger(__name__)


class LoginOutcome(StrEnum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    TIMED_OUT = "timed_out"
    FAILED = "failed"
    MISSING_BINARY = "missing_binary"


@dataclass(frozen=True)
class LoginResult:
    """Outcome and raw output of an external login run."""

    outcome: LoginOutcome
    output: str = ""
    exit_code: int | None = None


def login_target(store: CodexAccountStore) -> Path | None:
    """Directory the next login should write credentials into.

    Returns:
        Path of the selected account, or None when nothing is selected
    """
    return store.codex_home()


def record_login_result(
    result: LoginResult,
    account_id: str | None = None,
) -> bool:
    """Log a login outcome without its output text.

    Args:
        result: Result reported by the login runner
        account_id: Account the login targeted

    Returns:
        True if the login succeeded
    """
    log = logger.info if result.outcome is LoginOutcome.SUCCESS else logger.warning
    log(
        "codex_login",
        outcome=str(result.outcome),
        length=len(result.output),
        exit_code=result.exit_code,
        account=account_id,
    )
    return result.outcome is LoginOutcome.SUCCESS
