"""History file parsing and collection.

- parser.py: Turns one raw zsh extended-history line into a HistoryRecord
- collector.py: Reads a history file and keeps the last record per command
"""

from shellrack.history.collector import collect_records, read_history
from shellrack.history.parser import extract_timestamp, parse_line, split_segments

__all__ = [
    "collect_records",
    "read_history",
    "parse_line",
    "split_segments",
    "extract_timestamp",
]
