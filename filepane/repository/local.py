"""Repository backed by a single directory on disk."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from filepane.config.constants import ROOT_FILE_MARKER
from filepane.config.settings import get_env_var
from filepane.exceptions import (
    FileNotFoundInRepositoryError,
    FileReadError,
    FileWriteError,
    InvalidFileNameError,
)
from filepane.models.files import FileRecord, FileType

logger = logging.getLogger(__name__)


def _read_first_line(path: Path) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.readline()
    except OSError:
        return ""


class LocalFileRepository:
    """Flat listing of the regular files in one directory.

    Sub-directories and hidden files are not listed. Each record's path is
    "/" followed by its file name. The first file whose first line starts
    with the root marker becomes the root file.
    """

    def __init__(self, directory: Path, root_marker: Optional[str] = None):
        self.directory = directory.resolve()
        self.root_marker = root_marker or get_env_var("FILEPANE_ROOT_MARKER") or ROOT_FILE_MARKER
        self.children: List[FileRecord] = []
        self.refresh()

    def refresh(self) -> None:
        """Re-read the directory, replacing the list contents in place."""
        entries = sorted(
            (e for e in self.directory.iterdir() if e.is_file() and not e.name.startswith(".")),
            key=lambda e: e.name.lower(),
        )
        records = []
        has_root = False
        for entry in entries:
            is_root = not has_root and _read_first_line(entry).startswith(self.root_marker)
            has_root = has_root or is_root
            records.append(FileRecord(name=entry.name, path=self._path_for(entry.name), root=is_root))

        self.children[:] = records
        logger.info(f"📁 Listed {len(records)} files in {self.directory}")

    @staticmethod
    def _path_for(name: str) -> str:
        return f"/{name}"

    def _disk_path(self, file: FileRecord) -> Path:
        return self.directory / file.name

    def _contains(self, file: FileRecord) -> bool:
        return any(child is file for child in self.children)

    def _validate_name(self, name: str) -> str:
        name = name.strip()
        if not name or name in (".", ".."):
            raise InvalidFileNameError("File name cannot be empty", name=name)
        if "/" in name or "\\" in name:
            raise InvalidFileNameError("File name cannot contain a path separator", name=name)
        if self.get_by_path(self._path_for(name)) or (self.directory / name).exists():
            raise InvalidFileNameError("A file with that name already exists", name=name)
        return name

    def get_by_path(self, path: str) -> Optional[FileRecord]:
        for child in self.children:
            if child.path == path:
                return child
        return None

    async def load_file(self, file: FileRecord) -> None:
        disk_path = self._disk_path(file)
        try:
            contents = await asyncio.to_thread(disk_path.read_text, encoding="utf-8")
        except OSError as e:
            raise FileReadError(path=file.path) from e

        file.contents = contents
        file.loaded = True
        file.dirty = False
        logger.info(f"📄 Loaded {file.path} ({len(contents)} chars)")

    async def save_file(self, file: FileRecord) -> None:
        if not self._contains(file):
            # Removed while the save was pending; writing would resurrect it
            logger.info(f"💾 Skipping save of removed file {file.path}")
            return

        disk_path = self._disk_path(file)
        try:
            await asyncio.to_thread(disk_path.write_text, file.contents or "", encoding="utf-8")
        except OSError as e:
            raise FileWriteError(path=file.path) from e

        file.persisted = True
        logger.info(f"💾 Saved {file.path}")

    async def create_file(self, name: str, contents: str = "") -> FileRecord:
        """Create an empty (or seeded) file and insert it into the listing."""
        name = self._validate_name(name)
        disk_path = self.directory / name
        try:
            await asyncio.to_thread(disk_path.write_text, contents, encoding="utf-8")
        except OSError as e:
            raise FileWriteError(path=self._path_for(name)) from e

        is_root = contents.startswith(self.root_marker) and not any(c.root for c in self.children)
        record = FileRecord(
            name=name,
            path=self._path_for(name),
            type=FileType.FILE,
            root=is_root,
            loaded=True,
            contents=contents,
        )

        index = 0
        while index < len(self.children) and self.children[index].name.lower() < name.lower():
            index += 1
        self.children.insert(index, record)
        logger.info(f"✨ Created {record.path}")
        return record

    async def remove_file(self, file: FileRecord) -> None:
        """Delete the file from disk and drop it from the listing."""
        if not self._contains(file):
            raise FileNotFoundInRepositoryError(path=file.path)
        try:
            await asyncio.to_thread(self._disk_path(file).unlink, missing_ok=True)
        except OSError as e:
            raise FileWriteError("Failed to delete file", path=file.path) from e

        self.children[:] = [child for child in self.children if child is not file]
        file.persisted = False
        logger.info(f"🗑️ Removed {file.path}")

    async def rename_file(self, file: FileRecord, new_name: str) -> str:
        """Rename the file on disk and update the record in place.

        Returns:
            The record's previous path
        """
        if not self._contains(file):
            raise FileNotFoundInRepositoryError(path=file.path)
        new_name = self._validate_name(new_name)
        old_path = file.path
        try:
            await asyncio.to_thread(self._disk_path(file).rename, self.directory / new_name)
        except OSError as e:
            raise FileWriteError("Failed to rename file", path=old_path) from e

        file.name = new_name
        file.path = self._path_for(new_name)
        logger.info(f"✏️ Renamed {old_path} -> {file.path}")
        return old_path
