"""Core HistoryStore class.

SQLite table of history records keyed by command text, with an atomic
batch upsert and a most-recent-first scan.
"""

import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from types import TracebackType

from shellrack.constants import HISTORY_TABLE, STORE_CONNECT_TIMEOUT
from shellrack.exceptions import ScanError, StoreUnavailableError, TransactionError
from shellrack.models.record import HistoryRecord
from shellrack.store.codec import from_sql_text, to_sql_text
from shellrack.store.migrations import apply_migrations
from shellrack.store.schema import (
    COUNT_SQL,
    SCAN_DESCENDING_SQL,
    SCHEMA_STATEMENTS,
    SCHEMA_VERSION,
    TABLE_EXISTS_SQL,
    UPSERT_SQL,
)

logger = logging.getLogger(__name__)


class HistoryStore:
    """SQLite-backed store of shell history records.

    At most one row exists per command. The store assumes a single user at
    a time; transactions give atomic batches, not isolation between
    concurrent shellrack processes.
    """

    def __init__(self, db_path: Path):
        """Open the store and make sure its schema exists.

        Args:
            db_path: Path to SQLite database file. Created if missing.

        Raises:
            StoreUnavailableError: If the database cannot be opened or prepared.
        """
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None
        try:
            self.ensure_schema()
        except StoreUnavailableError:
            self.close()
            raise

    def __enter__(self) -> "HistoryStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get the database connection, opening it on first use."""
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            # Autocommit mode: transactions are opened explicitly in _transaction
            self._conn = sqlite3.connect(
                str(self.db_path),
                timeout=STORE_CONNECT_TIMEOUT,
                isolation_level=None,
            )
            self._conn.row_factory = sqlite3.Row
        return self._conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        conn = self._get_connection()
        conn.execute("BEGIN IMMEDIATE")
        try:
            yield conn
            conn.execute("COMMIT")
        except Exception as e:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            logger.error(f"Database transaction error: {e}", exc_info=True)
            raise

    def ensure_schema(self) -> None:
        """Create the history table if needed, migrating older layouts.

        Safe to call on every start.

        Raises:
            StoreUnavailableError: If the schema cannot be created or migrated,
                or the database was written by a newer schema version.
        """
        try:
            with self._transaction() as conn:
                current_version = conn.execute("PRAGMA user_version").fetchone()[0]
                if current_version > SCHEMA_VERSION:
                    raise StoreUnavailableError(
                        f"History store schema v{current_version} is newer than "
                        f"supported v{SCHEMA_VERSION}",
                        self.db_path,
                    )
                table_exists = conn.execute(TABLE_EXISTS_SQL, (HISTORY_TABLE,)).fetchone()[0]

                if not table_exists:
                    for statement in SCHEMA_STATEMENTS:
                        conn.execute(statement)
                    logger.info("History table created")
                elif current_version < SCHEMA_VERSION:
                    apply_migrations(conn, current_version)

                if current_version != SCHEMA_VERSION:
                    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
        except (OSError, sqlite3.Error) as e:
            raise StoreUnavailableError(
                f"Cannot open history store: {e}", self.db_path
            ) from e

    def upsert_batch(self, records: Iterable[HistoryRecord]) -> int:
        """Insert or replace every record in one transaction.

        A record replaces any stored row with the same key entirely. If any
        write fails, nothing from the batch is kept.

        Args:
            records: Records to write, in any order.

        Returns:
            Number of records written.

        Raises:
            TransactionError: If the transaction cannot begin, a write fails,
                or the commit fails.
        """
        rows = [
            (to_sql_text(record.key), to_sql_text(record.stored_line), record.timestamp)
            for record in records
        ]
        try:
            with self._transaction() as conn:
                conn.executemany(UPSERT_SQL, rows)
        except (sqlite3.Error, OverflowError) as e:
            raise TransactionError(f"Batch upsert failed: {e}", self.db_path) from e

        logger.debug(f"Upserted {len(rows)} records into {self.db_path}")
        return len(rows)

    def scan_descending(self) -> Iterator[str]:
        """Yield every stored history line, most recent timestamp first.

        The iterator reads rows lazily and must be drained or closed before
        the store is closed. Ties keep a stable order within one scan.

        Raises:
            ScanError: If reading rows fails.
        """
        try:
            cursor = self._get_connection().execute(SCAN_DESCENDING_SQL)
            for row in cursor:
                yield from_sql_text(row["history_line"])
        except sqlite3.Error as e:
            raise ScanError(f"Reading history rows failed: {e}", self.db_path) from e

    def count(self) -> int:
        """Number of stored records."""
        try:
            row = self._get_connection().execute(COUNT_SQL).fetchone()
        except sqlite3.Error as e:
            raise ScanError(f"Counting history rows failed: {e}", self.db_path) from e
        return int(row[0])

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
