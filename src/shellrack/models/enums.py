"""Enum types for shellrack.

Type-safe values for operation modes, error kinds, and where a configured
path came from.
"""

from enum import Enum


class OperationMode(str, Enum):
    """The single operation a shellrack invocation performs."""

    BACKUP = "backup"
    RESTORE = "restore"


class ErrorKind(str, Enum):
    """Operation-fatal error categories."""

    SOURCE_UNAVAILABLE = "source_unavailable"
    MALFORMED_METADATA = "malformed_metadata"
    STORE_UNAVAILABLE = "store_unavailable"
    TRANSACTION_FAILURE = "transaction_failure"
    SCAN_FAILURE = "scan_failure"


class PathSource(str, Enum):
    """Where a resolved path was taken from, highest priority first."""

    OPTION = "option"
    ENVIRONMENT = "environment"
    CONFIG_FILE = "config file"
    DEFAULT = "default"
