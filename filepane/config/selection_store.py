"""
Persistent key/value store for browser state.

Holds the serialized {name, path} of the last selected file under the
"currentFile" key. The store is a flat JSON object of string values,
kept in ~/.config/filepane/state.json.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from .settings import get_store_path

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal store interface the file browser consumes."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored string for key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any prior value."""
        ...


class SelectionStore:
    """JSON-file backed implementation of KeyValueStore.

    Every write goes straight to disk so the selection survives a crash.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path or get_store_path()

    def _load(self) -> dict[str, str]:
        """
        Load the store contents.

        Returns:
            Dict of stored values, or empty if the file doesn't exist or is invalid
        """
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Ignoring unreadable store {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n")
        except OSError as e:
            # Selection is non-critical, the browser keeps working without it
            logger.error(f"Could not write store {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        """Delete key if present."""
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)

    def clear(self) -> None:
        """Drop every stored value."""
        self._save({})
