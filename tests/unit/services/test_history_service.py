"""Tests for backup and restore operations.

Tests cover:
- backup_history() counts, idempotence, and all-or-nothing behaviour
- restore_history() ordering and append-only contract
- run_backup() / run_restore() / run_operation() result reporting
"""

import os
import stat
from unittest.mock import patch

import pytest

from shellrack.exceptions import (
    MalformedMetadataError,
    ScanError,
    SourceUnavailableError,
    TransactionError,
)
from shellrack.models.enums import ErrorKind, OperationMode
from shellrack.models.results import BackupResult, ResolvedPaths, RestoreResult
from shellrack.services.history_service import (
    backup_history,
    restore_history,
    run_backup,
    run_operation,
    run_restore,
)
from shellrack.store.core import HistoryStore

SCENARIO_LINES = [
    ": 1000:0;ls -la\n",
    ": 2000:0;cd /tmp\n",
    ": 1000:0;ls -la\n",
]

# =============================================================================
# backup_history() Tests
# =============================================================================


class TestBackupHistory:
    """Test backup_history()."""

    def test_reports_distinct_commands(self, store, write_history):
        """Test the repeated-command scenario saves two commands."""
        path = write_history(SCENARIO_LINES)

        assert backup_history(store, path) == 2
        assert store.count() == 2

    def test_is_idempotent(self, store, write_history):
        """Test that backing up the same file twice leaves the same records."""
        path = write_history(SCENARIO_LINES)

        backup_history(store, path)
        first = sorted(store.scan_descending())
        backup_history(store, path)

        assert sorted(store.scan_descending()) == first
        assert store.count() == 2

    def test_only_unparsable_lines(self, store, write_history):
        """Test that a file without commands saves nothing."""
        path = write_history(["no-semicolon-here\n"])

        assert backup_history(store, path) == 0
        assert store.count() == 0

    def test_malformed_line_leaves_store_unchanged(self, store, write_history):
        """Test that bad metadata aborts before any write."""
        backup_history(store, write_history([": 5:0;kept\n"], name="first"))
        bad = write_history([": 6:0;new\n", ": badformat;echo hi\n"], name="second")

        with pytest.raises(MalformedMetadataError):
            backup_history(store, bad)

        assert list(store.scan_descending()) == [": 5:0;kept"]

    def test_malformed_line_opens_no_transaction(self, store, write_history):
        """Test that the store is never asked to write on a parse failure."""
        bad = write_history([": badformat;echo hi\n"])

        with patch.object(store, "upsert_batch") as mock_upsert:
            with pytest.raises(MalformedMetadataError):
                backup_history(store, bad)

        mock_upsert.assert_not_called()

    def test_missing_source(self, store, tmp_path):
        """Test that a missing history file raises SourceUnavailableError."""
        with pytest.raises(SourceUnavailableError):
            backup_history(store, tmp_path / "missing")

        assert store.count() == 0

    def test_newer_backup_updates_record(self, store, write_history):
        """Test that a later backup replaces an older line for the same command."""
        backup_history(store, write_history([": 10:0;make\n"], name="old"))
        backup_history(store, write_history([": 20:0;make\n"], name="new"))

        assert list(store.scan_descending()) == [": 20:0;make"]


# =============================================================================
# restore_history() Tests
# =============================================================================


class TestRestoreHistory:
    """Test restore_history()."""

    def test_writes_most_recent_first(self, store, write_history, tmp_path):
        """Test that lines are appended in descending timestamp order."""
        backup_history(
            store,
            write_history([": 100:0;a\n", ": 300:0;c\n", ": 200:0;b\n"]),
        )
        dest = tmp_path / "restored"

        assert restore_history(store, dest) == 3
        assert dest.read_text() == ": 300:0;c\n: 200:0;b\n: 100:0;a\n"

    def test_appends_after_existing_content(self, store, write_history, tmp_path):
        """Test that existing content is left untouched."""
        backup_history(store, write_history([": 1:0;ls\n"]))
        dest = tmp_path / "restored"
        dest.write_text(": 0:0;existing\n")

        restore_history(store, dest)

        assert dest.read_text() == ": 0:0;existing\n: 1:0;ls\n"

    def test_restoring_twice_duplicates_lines(self, store, write_history, tmp_path):
        """Test that restore does not deduplicate against the destination."""
        backup_history(store, write_history([": 1:0;ls\n"]))
        dest = tmp_path / "restored"

        restore_history(store, dest)
        restore_history(store, dest)

        assert dest.read_text() == ": 1:0;ls\n: 1:0;ls\n"

    def test_round_trip_is_byte_exact(self, store, tmp_path):
        """Test that backed-up lines restore with their original bytes."""
        source = tmp_path / "source"
        source.write_bytes(b": 1:0;echo \x83caf\xc3\xa9\n")
        backup_history(store, source)
        dest = tmp_path / "restored"

        restore_history(store, dest)

        assert dest.read_bytes() == b": 1:0;echo \x83caf\xc3\xa9\n"

    def test_new_file_is_private(self, store, tmp_path):
        """Test that a created destination has mode 0600."""
        dest = tmp_path / "restored"
        old_umask = os.umask(0)
        try:
            restore_history(store, dest)
        finally:
            os.umask(old_umask)

        assert stat.S_IMODE(dest.stat().st_mode) == 0o600

    def test_empty_store_creates_empty_file(self, store, tmp_path):
        """Test that restoring nothing still creates the destination."""
        dest = tmp_path / "restored"

        assert restore_history(store, dest) == 0
        assert dest.read_text() == ""

    def test_unopenable_destination(self, store, tmp_path):
        """Test that a directory destination raises SourceUnavailableError."""
        with pytest.raises(SourceUnavailableError) as exc_info:
            restore_history(store, tmp_path)

        assert exc_info.value.operation == "append"

    def test_scan_failure_keeps_written_lines(self, store, tmp_path):
        """Test that lines appended before a scan failure remain and are counted."""
        dest = tmp_path / "restored"

        def failing_scan():
            yield ": 2:0;first"
            raise ScanError("disk I/O error", store.db_path)

        with patch.object(store, "scan_descending", side_effect=failing_scan):
            with pytest.raises(ScanError) as exc_info:
                restore_history(store, dest)

        assert exc_info.value.lines_written == 1
        assert dest.read_text() == ": 2:0;first\n"


# =============================================================================
# run_* wrappers
# =============================================================================


class TestRunBackup:
    """Test run_backup() result reporting."""

    def test_success(self, write_history, db_path):
        """Test that a successful backup reports its count."""
        path = write_history(SCENARIO_LINES)

        result = run_backup(path, db_path)

        assert isinstance(result, BackupResult)
        assert result.success is True
        assert result.record_count == 2
        assert result.error is None

    def test_malformed_metadata(self, write_history, db_path):
        """Test that bad metadata fails and the store gains no rows."""
        path = write_history([": badformat;echo hi\n"])

        result = run_backup(path, db_path)

        assert result.success is False
        assert result.error_kind is ErrorKind.MALFORMED_METADATA
        with HistoryStore(db_path) as store:
            assert store.count() == 0

    def test_missing_source(self, tmp_path, db_path):
        """Test that a missing source file is reported."""
        result = run_backup(tmp_path / "missing", db_path)

        assert result.success is False
        assert result.error_kind is ErrorKind.SOURCE_UNAVAILABLE

    def test_store_unavailable(self, write_history, tmp_path):
        """Test that an unopenable store is reported before reading the source."""
        path = write_history(SCENARIO_LINES)

        result = run_backup(path, tmp_path)

        assert result.success is False
        assert result.error_kind is ErrorKind.STORE_UNAVAILABLE

    @patch("shellrack.store.core.HistoryStore.upsert_batch")
    def test_transaction_failure(self, mock_upsert, write_history, db_path):
        """Test that transaction failures are reported."""
        mock_upsert.side_effect = TransactionError("commit failed", db_path)

        result = run_backup(write_history(SCENARIO_LINES), db_path)

        assert result.success is False
        assert result.error_kind is ErrorKind.TRANSACTION_FAILURE
        assert "commit failed" in result.error


class TestRunRestore:
    """Test run_restore() result reporting."""

    def test_success(self, write_history, db_path, tmp_path):
        """Test that a successful restore reports lines written."""
        run_backup(write_history(SCENARIO_LINES), db_path)
        dest = tmp_path / "restored"

        result = run_restore(dest, db_path)

        assert isinstance(result, RestoreResult)
        assert result.success is True
        assert result.record_count == 2
        assert dest.read_text() == ": 2000:0;cd /tmp\n: 1000:0;ls -la\n"

    @patch("shellrack.store.core.HistoryStore.scan_descending")
    def test_scan_failure_reports_partial_count(self, mock_scan, db_path, tmp_path):
        """Test that a scan failure reports how many lines were appended."""

        def failing_scan():
            yield ": 1:0;a"
            yield ": 0:0;b"
            raise ScanError("database disk image is malformed", db_path)

        mock_scan.side_effect = failing_scan

        result = run_restore(tmp_path / "restored", db_path)

        assert result.success is False
        assert result.error_kind is ErrorKind.SCAN_FAILURE
        assert result.record_count == 2


class TestRunOperation:
    """Test run_operation() dispatch."""

    def test_no_mode_does_nothing(self, tmp_path):
        """Test that no selected mode performs no operation."""
        paths = ResolvedPaths(history_file=tmp_path / "h", db_file=tmp_path / "db.sqlite")

        assert run_operation(None, paths) is None
        assert not paths.db_file.exists()

    def test_backup_then_restore(self, write_history, tmp_path):
        """Test dispatch to both operations."""
        source = write_history(SCENARIO_LINES)
        db_file = tmp_path / "db.sqlite"

        backup = run_operation(
            OperationMode.BACKUP, ResolvedPaths(history_file=source, db_file=db_file)
        )
        restore = run_operation(
            OperationMode.RESTORE,
            ResolvedPaths(history_file=tmp_path / "restored", db_file=db_file),
        )

        assert isinstance(backup, BackupResult)
        assert isinstance(restore, RestoreResult)
        assert backup.record_count == restore.record_count == 2
