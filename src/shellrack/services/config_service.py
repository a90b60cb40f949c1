"""Configuration service for resolving shellrack paths and logging options.

Configuration Hierarchy (highest priority first):
    1. Command-line options
    2. Environment variables (SHELLRACK_*, including a .env file)
    3. Config file (~/.config/shellrack/config.yaml)
    4. Built-in defaults under the home directory

This is the only place that looks at the environment or the home
directory; operations receive already-resolved paths.

Typical Usage:
    >>> service = ConfigService()
    >>> paths = service.resolve_paths(history_option=None, db_option=None)
    >>> paths.history_file
    PosixPath('/home/me/.zsh_history')
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from shellrack.config.paths import (
    CONFIG_DIR,
    CONFIG_FILENAME,
    DEFAULT_DB_FILENAME,
    DEFAULT_HISTORY_FILENAME,
)
from shellrack.config.settings import ShellrackSettings, load_settings
from shellrack.models.config import LogConfig, LogRotationConfig, ShellrackConfig
from shellrack.models.enums import PathSource
from shellrack.models.results import ResolvedPaths

logger = logging.getLogger(__name__)


def _expand(path: Path | str) -> Path:
    return Path(path).expanduser()


class ConfigService:
    """Service for resolving effective configuration."""

    def __init__(self, settings: ShellrackSettings | None = None, home: Path | None = None):
        """Initialize config service.

        Args:
            settings: Environment settings (defaults to reading the environment)
            home: Home directory for defaults (defaults to Path.home())
        """
        self.settings = settings if settings is not None else load_settings()
        self.home = home or Path.home()
        if self.settings.config_file is not None:
            self.config_path = _expand(self.settings.config_file)
        else:
            self.config_path = self.home / CONFIG_DIR / CONFIG_FILENAME
        self._config: ShellrackConfig | None = None

    def load_config(self) -> ShellrackConfig:
        """Load the config file once; an unreadable file falls back to defaults."""
        if self._config is None:
            try:
                self._config = ShellrackConfig.load(self.config_path)
            except (OSError, yaml.YAMLError, ValidationError, TypeError) as e:
                logger.warning(f"Ignoring config file {self.config_path}: {e}")
                self._config = ShellrackConfig()
        return self._config

    def _resolve(
        self,
        option: Path | None,
        env_value: Path | None,
        config_value: str | None,
        default: Path,
    ) -> tuple[Path, PathSource]:
        if option is not None:
            return _expand(option), PathSource.OPTION
        if env_value is not None:
            return _expand(env_value), PathSource.ENVIRONMENT
        if config_value:
            return _expand(config_value), PathSource.CONFIG_FILE
        return default, PathSource.DEFAULT

    def resolve_paths(
        self,
        history_option: Path | None = None,
        db_option: Path | None = None,
    ) -> ResolvedPaths:
        """Resolve the history file and store locations.

        Args:
            history_option: ``--history`` value, if given
            db_option: ``--db`` value, if given

        Returns:
            ResolvedPaths with the source of each path
        """
        config = self.load_config()
        history_file, history_source = self._resolve(
            history_option,
            self.settings.history_file,
            config.history_file,
            self.home / DEFAULT_HISTORY_FILENAME,
        )
        db_file, db_source = self._resolve(
            db_option,
            self.settings.db_file,
            config.db_file,
            self.home / DEFAULT_DB_FILENAME,
        )
        return ResolvedPaths(
            history_file=history_file,
            db_file=db_file,
            history_source=history_source,
            db_source=db_source,
        )

    def resolve_logging(
        self,
        level_option: str | None = None,
        file_option: Path | None = None,
    ) -> LogConfig:
        """Resolve logging options with the same precedence as paths."""
        config = self.load_config().log
        level = level_option or self.settings.log_level or config.level

        log_file: str | None = config.file
        if self.settings.log_file is not None:
            log_file = str(self.settings.log_file)
        if file_option is not None:
            log_file = str(file_option)

        rotation = LogRotationConfig(
            enabled=config.rotation.enabled,
            max_size_mb=self.settings.log_max_size_mb or config.rotation.max_size_mb,
            backup_count=(
                self.settings.log_backup_count
                if self.settings.log_backup_count is not None
                else config.rotation.backup_count
            ),
        )
        return LogConfig(
            level=level.upper(),
            file=str(_expand(log_file)) if log_file else None,
            rotation=rotation,
        )
