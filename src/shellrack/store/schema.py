"""Database schema for the history store.

Contains the schema version and the SQL used by HistoryStore.
"""

from shellrack.constants import HISTORY_TABLE

# Schema version (stored in PRAGMA user_version)
# v1: history_line text, timestamp UNSIGNED BIG INT; no key column, duplicates possible
# v2: command TEXT PRIMARY KEY so repeated backups replace rows instead of adding them
SCHEMA_VERSION = 2

CREATE_TABLE_SQL = f"""
CREATE TABLE IF NOT EXISTS {HISTORY_TABLE} (
    command TEXT PRIMARY KEY,
    history_line TEXT NOT NULL,
    timestamp INTEGER NOT NULL
)
"""

CREATE_TIMESTAMP_INDEX_SQL = (
    f"CREATE INDEX IF NOT EXISTS idx_{HISTORY_TABLE.lower()}_timestamp "
    f"ON {HISTORY_TABLE}(timestamp)"
)

SCHEMA_STATEMENTS = (CREATE_TABLE_SQL, CREATE_TIMESTAMP_INDEX_SQL)

TABLE_EXISTS_SQL = """
SELECT EXISTS (
    SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ? LIMIT 1
)
"""

UPSERT_SQL = (
    f"INSERT OR REPLACE INTO {HISTORY_TABLE} (command, history_line, timestamp) "
    "VALUES (?, ?, ?)"
)

SCAN_DESCENDING_SQL = (
    f"SELECT history_line FROM {HISTORY_TABLE} ORDER BY timestamp DESC, rowid ASC"
)

COUNT_SQL = f"SELECT COUNT(*) FROM {HISTORY_TABLE}"
