"""
File lifecycle messages.

Whoever creates, removes or renames a file posts one of these after the
repository has updated its list. The file browser handles each kind in its
own handler (on_file_created, on_file_removed, ...).
"""

from textual.message import Message

from filepane.models.files import FileRecord


class FileMessage(Message):
    """Base class for messages about a single file record."""

    def __init__(self, file: FileRecord) -> None:
        super().__init__()
        self.file = file


class FileCreated(FileMessage):
    """A new file was created and inserted into the repository list."""

    pass


class FileRemoved(FileMessage):
    """A file was removed; it is no longer in the repository list."""

    pass


class FileRenamed(FileMessage):
    """A file was renamed in place.

    Attributes:
        file: The renamed record, already carrying its new name and path
        old_path: Path the record had before the rename
    """

    def __init__(self, file: FileRecord, old_path: str) -> None:
        super().__init__(file)
        self.old_path = old_path


class OptionsRequested(FileMessage):
    """The options (gear) control of a row was clicked."""

    pass


class ContextMenuAction(FileMessage):
    """An entry of the context menu was chosen.

    Attributes:
        action: One of "save", "rename", "delete"
    """

    def __init__(self, file: FileRecord, action: str) -> None:
        super().__init__(file)
        self.action = action


class ContextMenuClosed(Message):
    """The context menu was dismissed without choosing an action."""

    pass
