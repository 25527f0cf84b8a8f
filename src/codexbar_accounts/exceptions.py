"""Exception hierarchy for codexbar-accounts.

All exceptions use proper exception chaining with the `from` keyword.
Errors raised inside the store are caught at its public boundary; only
configuration errors reach the command line.
"""

from typing import Any


class CodexAccountsError(Exception):
    """Base exception for all codexbar-accounts errors.

    Carries an optional mapping of structured details that is passed straight
    to the logger when the error is reported.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TokenDecodeError(CodexAccountsError):
    """A compact token could not be split, base64 decoded or parsed."""

    pass


class ConfigurationError(CodexAccountsError):
    """Raised when configuration loading or validation fails."""

    pass
