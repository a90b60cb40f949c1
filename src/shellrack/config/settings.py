"""Runtime configuration settings for shellrack.

This module uses Pydantic Settings so every path and logging option can be
overridden through environment variables with the SHELLRACK_ prefix. Unset
values stay ``None`` so the configuration service can tell an environment
override apart from a default.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShellrackSettings(BaseSettings):
    """Environment overrides.

    Examples:
        SHELLRACK_HISTORY_FILE=~/.zsh_history
        SHELLRACK_DB_FILE=~/backups/history.sqlite
        SHELLRACK_LOG_LEVEL=INFO
    """

    model_config = SettingsConfigDict(env_prefix="SHELLRACK_", extra="ignore")

    history_file: Path | None = Field(
        default=None,
        description="Shell history file to back up from or restore into",
    )
    db_file: Path | None = Field(
        default=None,
        description="SQLite database holding the backed-up history",
    )
    config_file: Path | None = Field(
        default=None,
        description="YAML config file (default: ~/.config/shellrack/config.yaml)",
    )
    log_level: str | None = Field(
        default=None,
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Path | None = Field(
        default=None,
        description="Write logs to this file instead of stderr",
    )
    log_max_size_mb: int | None = Field(
        default=None,
        ge=1,
        description="Rotate the log file after this many megabytes",
    )
    log_backup_count: int | None = Field(
        default=None,
        ge=0,
        description="Number of rotated log files to keep",
    )


def load_settings() -> ShellrackSettings:
    """Read settings from the current environment."""
    return ShellrackSettings()
