"""Logging setup for the shellrack CLI."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from shellrack.models.config import LogRotationConfig

PACKAGE_LOGGER = "shellrack"


def configure_logging(
    log_level: str,
    log_file: Path | None = None,
    log_rotation: LogRotationConfig | None = None,
) -> logging.Logger:
    """Configure the shellrack package logger.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path. Without one, logs go to stderr.
        log_rotation: Optional log rotation configuration.

    Returns:
        The configured package logger.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    app_logger = logging.getLogger(PACKAGE_LOGGER)
    app_logger.setLevel(level)
    app_logger.propagate = False
    # Reconfiguring must not stack handlers
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()

    if level == logging.DEBUG:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    handler: logging.Handler
    if log_file:
        rotation = log_rotation or LogRotationConfig()
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            if rotation.enabled:
                handler = RotatingFileHandler(
                    log_file,
                    mode="a",
                    maxBytes=rotation.get_max_bytes(),
                    backupCount=rotation.backup_count,
                    encoding="utf-8",
                )
            else:
                handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as e:
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            app_logger.addHandler(handler)
            app_logger.warning(f"Could not set up file logging to {log_file}: {e}")
            return app_logger
    else:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)
    app_logger.addHandler(handler)
    return app_logger
