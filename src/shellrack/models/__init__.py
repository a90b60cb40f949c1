"""Data models for shellrack"""

from .config import LogConfig, LogRotationConfig, ShellrackConfig
from .enums import ErrorKind, OperationMode, PathSource
from .record import HistoryRecord
from .results import BackupResult, ResolvedPaths, RestoreResult

__all__ = [
    "HistoryRecord",
    "BackupResult",
    "RestoreResult",
    "ResolvedPaths",
    "ShellrackConfig",
    "LogConfig",
    "LogRotationConfig",
    "ErrorKind",
    "OperationMode",
    "PathSource",
]
