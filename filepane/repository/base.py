"""Repository interface consumed by the file browser."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from filepane.models.files import FileRecord


@runtime_checkable
class FileRepository(Protocol):
    """A flat collection of files the browser lists and edits.

    ``children`` is the live list; implementations insert and remove
    records in place so holders of the list see every change.
    """

    children: list[FileRecord]

    def get_by_path(self, path: str) -> Optional[FileRecord]:
        """Return the record with this path, or None."""
        ...

    async def load_file(self, file: FileRecord) -> None:
        """Populate file.contents and set file.loaded."""
        ...

    async def save_file(self, file: FileRecord) -> None:
        """Persist file.contents."""
        ...


@runtime_checkable
class ManagedFileRepository(FileRepository, Protocol):
    """Repository that can also create, remove and rename files.

    Each operation updates ``children`` before returning; the caller then
    broadcasts the matching lifecycle message.
    """

    async def create_file(self, name: str, contents: str = "") -> FileRecord:
        ...

    async def remove_file(self, file: FileRecord) -> None:
        ...

    async def rename_file(self, file: FileRecord, new_name: str) -> str:
        """Rename in place and return the previous path."""
        ...
