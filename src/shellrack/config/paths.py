"""Path constants for shellrack.

Default locations are expressed relative to the user's home directory and
only turned into absolute paths by the configuration service.
"""

# =============================================================================
# History and Store Files
# =============================================================================

DEFAULT_HISTORY_FILENAME = ".zsh_history"
DEFAULT_DB_FILENAME = ".zsh_history.sqlite"

# =============================================================================
# Configuration
# =============================================================================

CONFIG_DIR = ".config/shellrack"
CONFIG_FILENAME = "config.yaml"
DOTENV_FILENAME = ".env"
