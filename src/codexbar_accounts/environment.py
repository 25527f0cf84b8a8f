"""Process environment access for the active account mirror.

The mirrored variable exists for subprocess integrations (the Codex CLI
reads `CODEX_HOME`). The store writes it but never treats it as the source
of truth for the selection.
"""

import os
from abc import ABC, abstractmethod


class Environment(ABC):
    """Abstract interface over a set of environment variables."""

    @abstractmethod
    def get(self, name: str) -> str | None:
        """Read a variable, None if unset."""

    @abstractmethod
    def set(self, name: str, value: str) -> None:
        """Set a variable, overwriting any previous value."""


class ProcessEnvironment(Environment):
    """The real environment of the current process."""

    def get(self, name: str) -> str | None:
        return os.environ.get(name)

    def set(self, name: str, value: str) -> None:
        os.environ[name] = value


class InMemoryEnvironment(Environment):
    """Dictionary-backed environment, for tests."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def set(self, name: str, value: str) -> None:
        self.values[name] = value
