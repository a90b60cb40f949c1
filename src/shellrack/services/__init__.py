"""Service layer for shellrack business logic."""

from shellrack.services.config_service import ConfigService
from shellrack.services.history_service import (
    backup_history,
    restore_history,
    run_backup,
    run_operation,
    run_restore,
)

__all__ = [
    "ConfigService",
    "backup_history",
    "restore_history",
    "run_backup",
    "run_restore",
    "run_operation",
]
