"""Configuration file model for shellrack."""

from pathlib import Path

from pydantic import BaseModel, Field

from shellrack.constants import (
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_MAX_SIZE_MB,
)


class LogRotationConfig(BaseModel):
    """Log file rotation settings."""

    enabled: bool = Field(default=True, description="Rotate the log file by size")
    max_size_mb: int = Field(default=DEFAULT_LOG_MAX_SIZE_MB, ge=1)
    backup_count: int = Field(default=DEFAULT_LOG_BACKUP_COUNT, ge=0)

    def get_max_bytes(self) -> int:
        """Rotation threshold in bytes."""
        return self.max_size_mb * 1024 * 1024


class LogConfig(BaseModel):
    """Logging section of the config file."""

    level: str = Field(default=DEFAULT_LOG_LEVEL, description="Log level")
    file: str | None = Field(default=None, description="Log file path")
    rotation: LogRotationConfig = Field(default_factory=LogRotationConfig)


class ShellrackConfig(BaseModel):
    """Contents of ``~/.config/shellrack/config.yaml``.

    Example:
        history_file: ~/.zsh_history
        db_file: ~/Dropbox/zsh_history.sqlite
        log:
          level: INFO
          file: ~/.cache/shellrack.log
    """

    history_file: str | None = Field(default=None, description="Shell history file")
    db_file: str | None = Field(default=None, description="SQLite store location")
    log: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def load(cls, config_path: Path) -> "ShellrackConfig":
        """Load configuration from file, returning defaults if it is missing or empty."""
        import yaml

        if not config_path.exists():
            return cls()

        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
            if not data:
                return cls()

        return cls(**data)
