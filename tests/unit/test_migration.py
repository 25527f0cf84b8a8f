"""Tests for legacy single-account migration."""

import shutil
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from codexbar_accounts import migration
from codexbar_accounts.migration import copy_if_exists
from codexbar_accounts.store import CodexAccountStore


class TestCopyIfExists:
    """Tests for copy_if_exists."""

    def test_copies_when_destination_absent(self, tmp_path: Path) -> None:
        source = tmp_path / "src.json"
        source.write_text("data")

        assert copy_if_exists(source, tmp_path / "dst.json")
        assert (tmp_path / "dst.json").read_text() == "data"

    def test_missing_source(self, tmp_path: Path) -> None:
        assert not copy_if_exists(tmp_path / "nope", tmp_path / "dst.json")
        assert not (tmp_path / "dst.json").exists()

    def test_never_overwrites(self, tmp_path: Path) -> None:
        source = tmp_path / "src.json"
        source.write_text("new")
        destination = tmp_path / "dst.json"
        destination.write_text("old")

        assert not copy_if_exists(source, destination)
        assert destination.read_text() == "old"

    def test_unsearchable_source_directory(
        self, tmp_path: Path, lock_directory
    ) -> None:
        """Test that a source behind a locked directory is reported, not raised."""
        source = tmp_path / "legacy" / "auth.json"
        source.parent.mkdir()
        source.write_text("data")
        lock_directory(source.parent)

        with capture_logs() as logs:
            assert not copy_if_exists(source, tmp_path / "dst.json")

        assert not (tmp_path / "dst.json").exists()
        assert logs[0]["event"] == "legacy_file_copy_failed"


class TestMigrateLegacyAccounts:
    """Tests for migrating legacy layouts through the store."""

    def test_auth_only_location(
        self, store: CodexAccountStore, legacy_dirs: list[Path], write_auth
    ) -> None:
        """Test that only the files present in the legacy location are copied."""
        write_auth(legacy_dirs[1], {"email": "legacy@example.com"})
        store.ensure_base_dir()

        migrated = store.migrate_legacy_accounts()

        assert len(migrated) == 1
        account = migrated[0]
        assert account.email == "legacy@example.com"
        assert (account.path / "auth.json").exists()
        assert not (account.path / ".credentials.json").exists()
        assert [a.id for a in store.accounts()] == [account.id]

    def test_each_location_gets_its_own_account(
        self, store: CodexAccountStore, legacy_dirs: list[Path], write_auth
    ) -> None:
        write_auth(legacy_dirs[0], {"email": "first@example.com"})
        legacy_dirs[1].mkdir(parents=True)
        (legacy_dirs[1] / ".credentials.json").write_text("{}")

        migrated = store.migrate_legacy_accounts()

        assert len(migrated) == 2
        assert migrated[0].id != migrated[1].id
        assert migrated[0].email == "first@example.com"
        assert (migrated[1].path / ".credentials.json").exists()
        assert not (migrated[1].path / "auth.json").exists()

    def test_locations_without_credentials_are_ignored(
        self, store: CodexAccountStore, legacy_dirs: list[Path]
    ) -> None:
        legacy_dirs[0].mkdir(parents=True)

        assert store.migrate_legacy_accounts() == []
        assert store.accounts() == []

    def test_second_run_is_noop(
        self,
        store: CodexAccountStore,
        accounts_dir: Path,
        legacy_dirs: list[Path],
        write_auth,
    ) -> None:
        """Test that migration does nothing once an account exists."""
        write_auth(legacy_dirs[1], {"email": "legacy@example.com"})
        store.migrate_legacy_accounts()
        before = sorted(p.name for p in accounts_dir.iterdir())

        assert store.migrate_legacy_accounts() == []
        assert sorted(p.name for p in accounts_dir.iterdir()) == before
        assert len(before) == 1

    def test_copy_failure_is_logged_and_skipped(
        self,
        store: CodexAccountStore,
        legacy_dirs: list[Path],
        write_auth,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that one failing file does not stop the other from copying."""
        write_auth(legacy_dirs[0], {"email": "legacy@example.com"})
        (legacy_dirs[0] / ".credentials.json").write_text("{}")
        real_copy = shutil.copy2

        def flaky_copy(source: Path, destination: Path) -> object:
            if source.name == "auth.json":
                raise PermissionError("denied")
            return real_copy(source, destination)

        monkeypatch.setattr(migration.shutil, "copy2", flaky_copy)

        with capture_logs() as logs:
            migrated = store.migrate_legacy_accounts()

        assert len(migrated) == 1
        assert not (migrated[0].path / "auth.json").exists()
        assert (migrated[0].path / ".credentials.json").exists()
        failures = [e for e in logs if e["event"] == "legacy_file_copy_failed"]
        assert len(failures) == 1
        assert failures[0]["file"] == "auth.json"

    def test_failed_account_creation_skips_location(
        self, legacy_dirs: list[Path], write_auth
    ) -> None:
        write_auth(legacy_dirs[0], {"email": "a@example.com"})

        assert migration.migrate_legacy_accounts(legacy_dirs, lambda: None) == []
