"""Collect history records from a file, one per distinct command."""

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from shellrack.constants import HISTORY_FILE_ENCODING, HISTORY_FILE_ERRORS
from shellrack.exceptions import SourceUnavailableError
from shellrack.history.parser import parse_line
from shellrack.models.record import HistoryRecord

logger = logging.getLogger(__name__)


def collect_records(lines: Iterable[str]) -> dict[str, HistoryRecord]:
    """Fold lines into a mapping of command key to record.

    Lines are consumed in order. Lines without a ``;`` are skipped. When a
    command appears more than once, the later line replaces the earlier one.

    Raises:
        MalformedMetadataError: On the first line with a command but bad metadata.
    """
    records: dict[str, HistoryRecord] = {}
    skipped = 0
    for line_number, line in enumerate(lines, start=1):
        record = parse_line(line, line_number)
        if record is None:
            skipped += 1
            continue
        records[record.key] = record

    if skipped:
        logger.debug(f"Skipped {skipped} lines without a command segment")
    return records


def _decode_lines(handle: Iterable[bytes]) -> Iterator[str]:
    for raw in handle:
        yield raw.decode(HISTORY_FILE_ENCODING, errors=HISTORY_FILE_ERRORS)


def read_history(history_path: Path) -> dict[str, HistoryRecord]:
    """Read a history file and collect its records.

    The file is split on ``\\n`` only, so a ``\\r\\n`` ending stays part of the
    raw line. The last line is parsed even without a newline.

    Args:
        history_path: Shell history file.

    Returns:
        Mapping of command key to the last record seen for it.

    Raises:
        SourceUnavailableError: If the file cannot be opened or read.
        MalformedMetadataError: If any line has bad metadata.
    """
    try:
        with open(history_path, "rb") as handle:
            records = collect_records(_decode_lines(handle))
    except OSError as e:
        raise SourceUnavailableError(
            f"Cannot read history file: {e.strerror or e}", history_path, "read"
        ) from e

    logger.debug(f"Collected {len(records)} distinct commands from {history_path}")
    return records
