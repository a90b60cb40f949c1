"""Parser for zsh extended-history lines.

A line looks like ``: 1700000000:0;git status``. Parsing has two distinct
failure modes:

- Fewer than two ``;``-separated segments: the line is not a history record
  and ``parse_line`` returns ``None``. Callers skip it.
- A command segment is present but the metadata segment does not carry a
  numeric timestamp: ``MalformedMetadataError`` is raised.

A command that itself contains ``;`` only keeps the text up to its first
``;`` as the key. The raw line is always kept whole.
"""

from shellrack.constants import (
    COMMAND_SEGMENT_INDEX,
    MAX_TIMESTAMP,
    METADATA_FIELD_SEPARATOR,
    METADATA_PREFIX,
    MIN_SEGMENTS,
    SEGMENT_DELIMITER,
)
from shellrack.exceptions import MalformedMetadataError
from shellrack.models.record import HistoryRecord, strip_line_terminator


def split_segments(line: str) -> list[str] | None:
    """Split a line on every ``;``.

    Returns:
        The segments, or None when there are fewer than two.
    """
    segments = line.split(SEGMENT_DELIMITER)
    if len(segments) < MIN_SEGMENTS:
        return None
    return segments


def extract_timestamp(metadata: str, line: str, line_number: int | None = None) -> int:
    """Extract the timestamp from a ``: <timestamp>:<duration>`` metadata segment.

    Args:
        metadata: Text before the first ``;``.
        line: The full line, for error reporting.
        line_number: 1-based position in the source file, for error reporting.

    Returns:
        Seconds since epoch.

    Raises:
        MalformedMetadataError: If the segment has no ``": "`` or the timestamp
            is not a non-negative integer that fits in the store.
    """
    pieces = metadata.split(METADATA_PREFIX)
    if len(pieces) < 2:
        raise MalformedMetadataError(
            line, f"expected '{METADATA_PREFIX}' before timestamp", line_number
        )

    raw_timestamp = pieces[1].split(METADATA_FIELD_SEPARATOR)[0]
    if not raw_timestamp or not (raw_timestamp.isascii() and raw_timestamp.isdigit()):
        raise MalformedMetadataError(
            line, f"timestamp {raw_timestamp!r} is not a number", line_number
        )

    timestamp = int(raw_timestamp)
    if timestamp > MAX_TIMESTAMP:
        raise MalformedMetadataError(line, f"timestamp {timestamp} is out of range", line_number)
    return timestamp


def parse_line(line: str, line_number: int | None = None) -> HistoryRecord | None:
    """Parse one history line.

    Args:
        line: The line as read, with or without its trailing newline.
        line_number: 1-based position in the source file, for error reporting.

    Returns:
        A HistoryRecord, or None if the line has no ``;`` at all.

    Raises:
        MalformedMetadataError: If the line has a command but bad metadata.
    """
    segments = split_segments(line)
    if segments is None:
        return None

    timestamp = extract_timestamp(segments[0], line, line_number)
    key = strip_line_terminator(segments[COMMAND_SEGMENT_INDEX])
    return HistoryRecord(key=key, timestamp=timestamp, raw_line=line)
