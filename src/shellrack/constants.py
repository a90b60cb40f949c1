"""Constants for shellrack.

This module contains:
- VERSION: Package version
- History line grammar (delimiters, limits)
- Store table and schema version

For paths, messages, and runtime settings, import from:
- shellrack.config.paths
- shellrack.config.messages
- shellrack.config.settings
"""

from shellrack import __version__

# =============================================================================
# Version
# =============================================================================

VERSION = __version__

# =============================================================================
# History Line Grammar
# =============================================================================

# ": <timestamp>:<duration>;<command>"
SEGMENT_DELIMITER = ";"
METADATA_PREFIX = ": "
METADATA_FIELD_SEPARATOR = ":"
MIN_SEGMENTS = 2
COMMAND_SEGMENT_INDEX = 1

# SQLite INTEGER is a signed 64-bit value
MAX_TIMESTAMP = 2**63 - 1

# Source history files are read with these settings so raw lines survive unchanged
HISTORY_FILE_ENCODING = "utf-8"
HISTORY_FILE_ERRORS = "surrogateescape"
RESTORE_FILE_MODE = 0o600

# =============================================================================
# Store
# =============================================================================

HISTORY_TABLE = "SHELLRACK"
STORE_CONNECT_TIMEOUT = 30.0

# =============================================================================
# Logging
# =============================================================================

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_MAX_SIZE_MB = 5
DEFAULT_LOG_BACKUP_COUNT = 3
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
