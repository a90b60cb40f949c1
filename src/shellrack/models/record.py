"""The HistoryRecord model: one stored shell command."""

from dataclasses import dataclass


def strip_line_terminator(line: str) -> str:
    """Remove exactly one trailing ``\\n`` or ``\\r\\n`` from ``line``."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


@dataclass(frozen=True)
class HistoryRecord:
    """A parsed history line.

    Attributes:
        key: Command text between the first and second ``;``. Unique in the store.
        timestamp: Seconds since epoch from the line's metadata segment.
        raw_line: The line exactly as read, terminator included.
    """

    key: str
    timestamp: int
    raw_line: str

    @property
    def stored_line(self) -> str:
        """Raw line as persisted: the original text without its line terminator."""
        return strip_line_terminator(self.raw_line)
