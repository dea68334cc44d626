"""
Centralized constants for filepane.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

FILEPANE_CONFIG_DIR = Path.home() / ".config" / "filepane"

# JSON file backing the selection store
STORE_FILE_NAME = "state.json"

# =============================================================================
# SELECTION
# =============================================================================

# Store key holding the serialized {name, path} of the last selected file
CURRENT_FILE_KEY = "currentFile"

# A file whose first line starts with this marker is the listing's root file
ROOT_FILE_MARKER = "#%RAML"

# =============================================================================
# LOGGING
# =============================================================================

LOG_FILE_NAME = "filepane.log"
KEY_LOG_FILE_NAME = "key_events.log"
MAX_LOG_BYTES = 5 * 1024 * 1024  # 5MB
LOG_BACKUP_COUNT = 2

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "FILEPANE_CONFIG_DIR": {
        "description": "Directory holding the selection store and logs",
        "default": None,
        "valid_values": None,
    },
    "FILEPANE_LOG_LEVEL": {
        "description": "Log level for filepane loggers",
        "default": "INFO",
        "valid_values": ["DEBUG", "INFO", "WARNING", "ERROR"],
    },
    "FILEPANE_ROOT_MARKER": {
        "description": "First-line marker identifying the root file",
        "default": ROOT_FILE_MARKER,
        "valid_values": None,
    },
}
