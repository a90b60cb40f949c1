"""Pytest configuration and fixtures for shellrack tests."""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from shellrack.store.core import HistoryStore
from shellrack.utils.logging_utils import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a temp dir and clear SHELLRACK_* variables.

    Returns:
        The fake home directory
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in (
        "SHELLRACK_HISTORY_FILE",
        "SHELLRACK_DB_FILE",
        "SHELLRACK_CONFIG_FILE",
        "SHELLRACK_LOG_LEVEL",
        "SHELLRACK_LOG_FILE",
        "SHELLRACK_LOG_MAX_SIZE_MB",
        "SHELLRACK_LOG_BACKUP_COUNT",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Drop handlers that configure_logging() attached during a test."""
    yield
    app_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.propagate = True
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def write_history(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing history lines to a file.

    Lines are written as given, so callers control the terminators.
    """

    def _write(lines: list[str], name: str = "zsh_history") -> Path:
        path = tmp_path / name
        path.write_bytes("".join(lines).encode("utf-8"))
        return path

    return _write


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Location for a fresh store database."""
    return tmp_path / "store" / "history.sqlite"


@pytest.fixture
def store(db_path: Path) -> Iterator[HistoryStore]:
    """Open HistoryStore, closed after the test."""
    history_store = HistoryStore(db_path)
    try:
        yield history_store
    finally:
        history_store.close()
