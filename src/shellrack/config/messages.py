"""User-facing messages for shellrack.

Success, error, and info strings printed by the CLI, plus the help text.
"""

# =============================================================================
# Project Metadata
# =============================================================================

PROJECT_TAGLINE = "Back up and restore your shell history"

HELP_TEXT = f"""
[bold cyan]shellrack[/bold cyan] - {PROJECT_TAGLINE}

[bold]Commands:[/bold]
  [cyan]backup[/cyan]     Save the history file into the SQLite store
  [cyan]restore[/cyan]    Append stored commands to a history file, newest first
  [cyan]info[/cyan]       Show resolved paths and the number of stored commands
  [cyan]version[/cyan]    Show version information

[bold]Examples:[/bold]
  [dim]$ shellrack backup[/dim]
  [dim]$ shellrack backup --history ~/.zsh_history --db ~/backups/history.sqlite[/dim]
  [dim]$ shellrack restore --history ~/.zsh_history.restored[/dim]
"""

# =============================================================================
# Operation Messages
# =============================================================================

INFO_MESSAGES = {
    "backing_up": "Backing up shell history from {history_file}",
    "restoring": "Restoring shell history into {history_file}",
    "restore_appends": "Restore appends; running it again duplicates the restored lines",
}

SUCCESS_MESSAGES = {
    "backup_complete": "{count} commands saved to {db_file}",
    "restore_complete": "{count} commands restored to {history_file}",
}

ERROR_MESSAGES = {
    "generic_error": "An error occurred: {error}",
    "backup_failed": "Backup failed: {error}",
    "restore_failed": "Restore failed: {error}",
    "partial_restore": "{count} lines were already appended before the failure",
    "info_failed": "Could not read store: {error}",
    "invalid_log_level": "Invalid log level '{level}'. Choose one of: {choices}",
}
