"""Conversions between history text and SQLite values.

History files may hold bytes that are not valid UTF-8 (zsh metafies
non-ASCII input). They are decoded with ``surrogateescape``, which SQLite
cannot bind as TEXT, so such values are stored as BLOBs of the original
bytes and decoded back the same way on read.
"""

from shellrack.constants import HISTORY_FILE_ENCODING, HISTORY_FILE_ERRORS


def to_sql_text(value: str) -> str | bytes:
    """Return ``value`` as TEXT when it is valid UTF-8, else as its raw bytes."""
    try:
        value.encode(HISTORY_FILE_ENCODING)
    except UnicodeEncodeError:
        return value.encode(HISTORY_FILE_ENCODING, errors=HISTORY_FILE_ERRORS)
    return value


def from_sql_text(value: str | bytes) -> str:
    """Inverse of ``to_sql_text``."""
    if isinstance(value, bytes):
        return value.decode(HISTORY_FILE_ENCODING, errors=HISTORY_FILE_ERRORS)
    return value
