"""File records and the persisted selection snapshot."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class FileType(str, Enum):
    """Kind of entry in a listing. Only files take part in browsing."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(eq=False)
class FileRecord:
    """One file known to the browser.

    Records are compared by identity: two records with equal fields are
    still different files as far as selection is concerned.
    """

    name: str
    path: str
    type: FileType = FileType.FILE
    root: bool = False
    dirty: bool = False
    loaded: bool = False
    persisted: bool = True
    contents: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.type is FileType.FILE

    def __repr__(self) -> str:
        flags = [f for f in ("root", "dirty", "loaded") if getattr(self, f)]
        return f"FileRecord({self.path!r}{', ' + ', '.join(flags) if flags else ''})"


@dataclass(frozen=True)
class SelectionRecord:
    """Snapshot of the last selected file, as kept in the selection store."""

    name: str
    path: str

    @classmethod
    def for_file(cls, file: FileRecord) -> "SelectionRecord":
        return cls(name=file.name, path=file.path)

    def to_json(self) -> str:
        return json.dumps({"name": self.name, "path": self.path})

    @classmethod
    def from_json(cls, raw: Optional[str]) -> Optional["SelectionRecord"]:
        """Parse a stored value, returning None for anything malformed."""
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.debug(f"Discarding unparseable selection: {raw!r}")
            return None
        if not isinstance(data, dict):
            return None
        name, path = data.get("name"), data.get("path")
        if not isinstance(name, str) or not isinstance(path, str):
            logger.debug(f"Discarding incomplete selection: {data!r}")
            return None
        return cls(name=name, path=path)
