"""Tests for the login hand-off helpers."""

from structlog.testing import capture_logs

from codexbar_accounts.login import (
    LoginOutcome,
    LoginResult,
    login_target,
    record_login_result,
)
from codexbar_accounts.store import CodexAccountStore


class TestLoginTarget:
    """Tests for login_target."""

    def test_no_selection(self, store: CodexAccountStore) -> None:
        assert login_target(store) is None

    def test_selected_account_directory(self, store: CodexAccountStore) -> None:
        account = store.create_account_and_activate()

        assert account is not None
        assert login_target(store) == account.path


class TestRecordLoginResult:
    """Tests for record_login_result."""

    def test_success(self) -> None:
        result = LoginResult(outcome=LoginOutcome.SUCCESS, output="Logged in", exit_code=0)

        with capture_logs() as logs:
            assert record_login_result(result, "acct-1")

        assert logs == [
            {
                "event": "codex_login",
                "log_level": "info",
                "outcome": "success",
                "length": 9,
                "exit_code": 0,
                "account": "acct-1",
            }
        ]

    def test_failure_does_not_log_output(self) -> None:
        """Test that the raw login output never reaches the log."""
        result = LoginResult(outcome=LoginOutcome.FAILED, output="secret-token-text")

        with capture_logs() as logs:
            assert not record_login_result(result)

        assert logs[0]["log_level"] == "warning"
        assert "secret-token-text" not in repr(logs)
