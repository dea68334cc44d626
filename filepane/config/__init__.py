"""Configuration and persisted state for filepane."""

from .constants import CURRENT_FILE_KEY, ROOT_FILE_MARKER
from .selection_store import KeyValueStore, SelectionStore
from .settings import get_config_dir, get_env_var, get_store_path

__all__ = [
    "CURRENT_FILE_KEY",
    "ROOT_FILE_MARKER",
    "KeyValueStore",
    "SelectionStore",
    "get_config_dir",
    "get_env_var",
    "get_store_path",
]
