"""Database migration functions for the history store."""

import logging
import sqlite3

from shellrack.constants import HISTORY_TABLE
from shellrack.exceptions import MalformedMetadataError
from shellrack.history.parser import parse_line
from shellrack.store.codec import from_sql_text, to_sql_text
from shellrack.store.schema import SCHEMA_STATEMENTS, UPSERT_SQL

logger = logging.getLogger(__name__)

LEGACY_TABLE = f"{HISTORY_TABLE}_v1"


def apply_migrations(conn: sqlite3.Connection, from_version: int) -> None:
    """Apply schema migrations from current version to latest.

    Args:
        conn: Database connection (within transaction).
        from_version: Current schema version.
    """
    if from_version < 2:
        _migrate_v1_to_v2(conn)


def _migrate_v1_to_v2(conn: sqlite3.Connection) -> None:
    """Migrate schema from v1 to v2: key rows by command.

    v1 tables hold only ``history_line`` and ``timestamp``. Each row is
    re-parsed to recover its command; rows that no longer parse are dropped,
    and among rows sharing a command the most recent one is kept.

    Idempotent: a table that already has the ``command`` column only gets
    its index ensured.
    """
    existing_columns = {
        row[1] for row in conn.execute(f"PRAGMA table_info({HISTORY_TABLE})").fetchall()
    }
    if "command" in existing_columns:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(statement)
        return

    logger.info("Migrating history store schema v1 -> v2 (command key)")

    conn.execute(f"ALTER TABLE {HISTORY_TABLE} RENAME TO {LEGACY_TABLE}")
    for statement in SCHEMA_STATEMENTS:
        conn.execute(statement)

    latest: dict[str, tuple[str, int]] = {}
    dropped = 0
    # v1 rows hold raw history bytes typed as TEXT, often not valid UTF-8
    rows = conn.execute(
        f"SELECT CAST(history_line AS BLOB) FROM {LEGACY_TABLE}"
    ).fetchall()
    for row in rows:
        value = row[0]
        if value is None:
            dropped += 1
            continue
        try:
            record = parse_line(from_sql_text(value))
        except MalformedMetadataError:
            record = None
        if record is None:
            dropped += 1
            continue
        current = latest.get(record.key)
        if current is None or record.timestamp >= current[1]:
            latest[record.key] = (record.stored_line, record.timestamp)

    conn.executemany(
        UPSERT_SQL,
        (
            (to_sql_text(key), to_sql_text(line), timestamp)
            for key, (line, timestamp) in latest.items()
        ),
    )
    conn.execute(f"DROP TABLE {LEGACY_TABLE}")

    if dropped:
        logger.warning(f"Dropped {dropped} unparsable rows while migrating the history store")
    logger.info(f"Migration v1 -> v2 complete: {len(latest)} commands kept")
