"""Shared fixtures for codexbar-accounts tests."""

import base64
import json
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from codexbar_accounts.environment import InMemoryEnvironment
from codexbar_accounts.preferences import InMemoryPreferenceStore
from codexbar_accounts.store import CodexAccountStore


def b64url(data: bytes) -> str:
    """Base64url encode without padding, as compact tokens do."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def make_id_token(claims: dict[str, Any]) -> str:
    header = b64url(b'{"alg":"RS256","typ":"JWT"}')
    payload = b64url(json.dumps(claims, separators=(",", ":")).encode())
    return f"{header}.{payload}.c2lnbmF0dXJl"


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture(name="b64url")
def b64url_fixture() -> Callable[[bytes], str]:
    return b64url


@pytest.fixture
def id_token() -> Callable[[dict[str, Any]], str]:
    return make_id_token


@pytest.fixture
def write_auth() -> Callable[..., Path]:
    """Write an auth.json holding an ID token built from `claims`."""

    def _write(
        directory: Path,
        claims: dict[str, Any] | None = None,
        *,
        token_key: str = "idToken",
    ) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        auth = {"tokens": {token_key: make_id_token(claims or {})}}
        path = directory / "auth.json"
        path.write_text(json.dumps(auth))
        return path

    return _write


@pytest.fixture
def lock_directory() -> Iterator[Callable[[Path], Path]]:
    """Drop the search bit on directories, restoring it on teardown."""
    if os.geteuid() == 0:
        pytest.skip("root ignores directory permissions")
    locked: list[Path] = []

    def _lock(directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        directory.chmod(0o600)
        locked.append(directory)
        return directory

    yield _lock
    for directory in locked:
        directory.chmod(0o700)


@pytest.fixture
def accounts_dir(tmp_path: Path) -> Path:
    return tmp_path / "codexbar" / "codex-accounts"


@pytest.fixture
def legacy_dirs(tmp_path: Path) -> list[Path]:
    return [tmp_path / "codexbar" / "codex", tmp_path / "home" / ".codex"]


@pytest.fixture
def preferences() -> InMemoryPreferenceStore:
    return InMemoryPreferenceStore()


@pytest.fixture
def environment() -> InMemoryEnvironment:
    return InMemoryEnvironment()


@pytest.fixture
def store(
    accounts_dir: Path,
    legacy_dirs: list[Path],
    preferences: InMemoryPreferenceStore,
    environment: InMemoryEnvironment,
) -> CodexAccountStore:
    """Account store over temporary folders and in-memory backends."""
    return CodexAccountStore(
        accounts_dir,
        preferences=preferences,
        environment=environment,
        legacy_dirs=legacy_dirs,
    )
