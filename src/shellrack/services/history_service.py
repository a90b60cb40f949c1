"""Backup and restore operations for shell history.

``backup_history`` and ``restore_history`` raise ShellrackError subclasses.
The ``run_*`` functions own the store's lifetime for one invocation and
turn those errors into BackupResult / RestoreResult values.
"""

import logging
import os
from pathlib import Path

from shellrack.constants import HISTORY_FILE_ENCODING, HISTORY_FILE_ERRORS, RESTORE_FILE_MODE
from shellrack.exceptions import ScanError, ShellrackError, SourceUnavailableError
from shellrack.history.collector import read_history
from shellrack.models.enums import OperationMode
from shellrack.models.results import BackupResult, ResolvedPaths, RestoreResult
from shellrack.store.core import HistoryStore

logger = logging.getLogger(__name__)


def backup_history(store: HistoryStore, history_path: Path) -> int:
    """Save a history file into the store.

    The whole file is parsed before the store is written, so a malformed
    line leaves the store unchanged.

    Args:
        store: Open history store.
        history_path: Shell history file to read.

    Returns:
        Number of distinct commands written.

    Raises:
        SourceUnavailableError: If the history file cannot be read.
        MalformedMetadataError: If a line has a command but bad metadata.
        TransactionError: If the batch upsert fails.
    """
    records = read_history(history_path)
    count = store.upsert_batch(records.values())
    logger.info(f"{count} commands saved to {store.db_path}")
    return count


def _open_for_append(history_path: Path) -> int:
    try:
        return os.open(history_path, os.O_WRONLY | os.O_CREAT | os.O_APPEND, RESTORE_FILE_MODE)
    except OSError as e:
        raise SourceUnavailableError(
            f"Cannot open history file for append: {e.strerror or e}", history_path, "append"
        ) from e


def restore_history(store: HistoryStore, history_path: Path) -> int:
    """Append every stored line to a history file, most recent first.

    Existing content is never modified. Restoring twice into the same file
    writes every line twice.

    Args:
        store: Open history store.
        history_path: Destination file, created with mode 0600 if missing.

    Returns:
        Number of lines appended.

    Raises:
        SourceUnavailableError: If the destination cannot be opened or written.
        ScanError: If reading rows fails; ``lines_written`` says how many
            lines were appended before the failure.
    """
    fd = _open_for_append(history_path)
    written = 0
    try:
        with os.fdopen(fd, "ab") as handle:
            for line in store.scan_descending():
                handle.write(line.encode(HISTORY_FILE_ENCODING, errors=HISTORY_FILE_ERRORS))
                handle.write(b"\n")
                written += 1
    except ScanError as e:
        raise ScanError(e.message, e.db_path, lines_written=written) from e
    except OSError as e:
        raise SourceUnavailableError(
            f"Cannot write history file: {e.strerror or e}", history_path, "append"
        ) from e

    logger.info(f"{written} commands restored to {history_path}")
    return written


def run_backup(history_path: Path, db_path: Path) -> BackupResult:
    """Open the store, back up ``history_path``, and report the outcome."""
    try:
        with HistoryStore(db_path) as store:
            count = backup_history(store, history_path)
    except ShellrackError as e:
        logger.error(f"Backup failed: {e}")
        return BackupResult(
            success=False,
            history_path=history_path,
            db_path=db_path,
            error=str(e),
            error_kind=e.kind,
        )

    return BackupResult(
        success=True,
        history_path=history_path,
        db_path=db_path,
        record_count=count,
    )


def run_restore(history_path: Path, db_path: Path) -> RestoreResult:
    """Open the store, restore into ``history_path``, and report the outcome."""
    try:
        with HistoryStore(db_path) as store:
            count = restore_history(store, history_path)
    except ShellrackError as e:
        logger.error(f"Restore failed: {e}")
        return RestoreResult(
            success=False,
            history_path=history_path,
            db_path=db_path,
            record_count=e.lines_written if isinstance(e, ScanError) else 0,
            error=str(e),
            error_kind=e.kind,
        )

    return RestoreResult(
        success=True,
        history_path=history_path,
        db_path=db_path,
        record_count=count,
    )


def run_operation(
    mode: OperationMode | None, paths: ResolvedPaths
) -> BackupResult | RestoreResult | None:
    """Run the selected operation; with no mode, do nothing and return None."""
    if mode is OperationMode.BACKUP:
        return run_backup(paths.history_file, paths.db_file)
    if mode is OperationMode.RESTORE:
        return run_restore(paths.history_file, paths.db_file)
    return None
