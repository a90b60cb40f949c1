"""Result types for shellrack operations.

Operations raise typed exceptions internally; the ``run_*`` wrappers in the
history service fold them into these results for the CLI.
"""

from dataclasses import dataclass
from pathlib import Path

from .enums import ErrorKind, PathSource


@dataclass
class BackupResult:
    """Outcome of backing up a history file."""

    success: bool
    history_path: Path
    db_path: Path
    record_count: int = 0
    error: str | None = None
    error_kind: ErrorKind | None = None


@dataclass
class RestoreResult:
    """Outcome of restoring history into a file.

    ``record_count`` counts lines appended, including those written before a
    scan failure, since restore is not rolled back.
    """

    success: bool
    history_path: Path
    db_path: Path
    record_count: int = 0
    error: str | None = None
    error_kind: ErrorKind | None = None


@dataclass
class ResolvedPaths:
    """Effective file locations after applying option, env, config, default."""

    history_file: Path
    db_file: Path
    history_source: PathSource = PathSource.DEFAULT
    db_source: PathSource = PathSource.DEFAULT
