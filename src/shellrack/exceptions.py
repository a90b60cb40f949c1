"""Custom exceptions for shellrack.

Every error is fatal to the operation that raised it. All exceptions inherit
from ShellrackError so callers can catch them with a single except clause.

Exception hierarchy:
    ShellrackError (base)
    ├── SourceUnavailableError
    ├── MalformedMetadataError
    └── StoreError
        ├── StoreUnavailableError
        ├── TransactionError
        └── ScanError
"""

from pathlib import Path
from typing import Any

from shellrack.models.enums import ErrorKind


class ShellrackError(Exception):
    """Base exception for all shellrack errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
    """

    kind: ErrorKind | None = None

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize shellrack error.

        Args:
            message: Error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# History File Errors
# =============================================================================


class SourceUnavailableError(ShellrackError):
    """Raised when a history file cannot be opened.

    Examples:
        - Backup source does not exist or is not readable
        - Restore destination cannot be opened for append
    """

    kind = ErrorKind.SOURCE_UNAVAILABLE

    def __init__(self, message: str, path: Path, operation: str):
        """Initialize source error.

        Args:
            message: Error description.
            path: The history file involved.
            operation: "read" for backup, "append" for restore.
        """
        super().__init__(message, {"path": str(path), "operation": operation})
        self.path = path
        self.operation = operation


class MalformedMetadataError(ShellrackError):
    """Raised when a line has a command segment but no valid ``: <ts>:<dur>`` prefix.

    Aborts the whole backup before the store is touched.
    """

    kind = ErrorKind.MALFORMED_METADATA

    def __init__(self, line: str, reason: str, line_number: int | None = None):
        """Initialize metadata error.

        Args:
            line: The offending line (truncated in details if long).
            reason: What part of the metadata grammar failed.
            line_number: 1-based line number in the source file, when known.
        """
        details: dict[str, Any] = {}
        if line_number is not None:
            details["line"] = line_number
        snippet = line.rstrip("\r\n")
        details["text"] = snippet[:80] + "..." if len(snippet) > 80 else snippet
        super().__init__(f"Malformed history metadata: {reason}", details)
        self.line = line
        self.reason = reason
        self.line_number = line_number


# =============================================================================
# Store Errors
# =============================================================================


class StoreError(ShellrackError):
    """Base class for SQLite store failures."""

    def __init__(self, message: str, db_path: Path | None = None):
        """Initialize store error.

        Args:
            message: Error description.
            db_path: The database file involved.
        """
        details = {}
        if db_path is not None:
            details["db"] = str(db_path)
        super().__init__(message, details)
        self.db_path = db_path


class StoreUnavailableError(StoreError):
    """Raised when the store cannot be opened or its schema cannot be ensured."""

    kind = ErrorKind.STORE_UNAVAILABLE


class TransactionError(StoreError):
    """Raised when the batch upsert transaction fails; nothing was committed."""

    kind = ErrorKind.TRANSACTION_FAILURE


class ScanError(StoreError):
    """Raised when reading rows fails during restore.

    Lines appended before the failure stay in the destination file.
    """

    kind = ErrorKind.SCAN_FAILURE

    def __init__(self, message: str, db_path: Path | None = None, lines_written: int = 0):
        """Initialize scan error.

        Args:
            message: Error description.
            db_path: The database file involved.
            lines_written: Lines already appended to the destination.
        """
        super().__init__(message, db_path)
        self.lines_written = lines_written
