"""Actions mixin for FileBrowser - file operations and the context menu."""

import logging
from typing import TYPE_CHECKING

from filepane.exceptions import FileOperationError
from filepane.models.files import FileRecord

from ..context_menu import ContextMenu
from ..file_list import FileList
from ..file_modals import ConfirmDeleteScreen, FileNameScreen
from ..messages import ContextMenuAction, FileCreated, FileRemoved, FileRenamed

if TYPE_CHECKING:
    from .view import FileBrowserView

logger = logging.getLogger(__name__)


class NewFilePromptLauncher:
    """New-file prompt for the state machine, backed by the browser's modal."""

    def __init__(self, file_browser: "FileBrowserView"):
        self.file_browser = file_browser

    def open(self) -> None:
        self.file_browser.action_new_file()


class FileBrowserActions:
    """Mixin providing action functionality for FileBrowser.

    Handles:
    - Save of the selected file
    - New file prompt
    - Context menu open/close and its save/rename/delete actions
    """

    def action_save(self: "FileBrowserView") -> None:
        """Save the selected file."""
        self.state.request_save()

    def action_new_file(self: "FileBrowserView") -> None:
        """Prompt for a name and create the file."""
        if self._prompt_open:
            logger.debug("New file prompt already open")
            return

        async def create(name: str) -> None:
            record = await self.repository.create_file(name)
            self.post_message(FileCreated(record))

        def closed(result) -> None:
            self._prompt_open = False
            logger.info(f"New file prompt closed with {result!r}")

        self._prompt_open = True
        self.app.push_screen(FileNameScreen("New file name", create), closed)

    def action_open_options(self: "FileBrowserView") -> None:
        """Open the context menu for the highlighted row."""
        row = self.query_one(FileList).highlighted_child
        if row is not None and hasattr(row, "record"):
            self.open_context_menu(row.record)

    def open_context_menu(self: "FileBrowserView", file: FileRecord) -> None:
        self.state.open_context_menu(file)
        self.query_one(ContextMenu).show_for(file)

    def close_context_menu(self: "FileBrowserView") -> None:
        self.state.close_context_menu()
        self.query_one(ContextMenu).hide()
        self.query_one(FileList).focus()

    def on_context_menu_action(self: "FileBrowserView", message: ContextMenuAction) -> None:
        message.stop()
        self.close_context_menu()
        file = message.file

        if message.action == "save":
            self.state.request_save(file)
        elif message.action == "rename":
            self._rename(file)
        elif message.action == "delete":
            self._confirm_delete(file)
        else:
            logger.warning(f"Unknown context menu action {message.action!r}")

    def _rename(self: "FileBrowserView", file: FileRecord) -> None:
        async def rename(name: str) -> None:
            old_path = await self.repository.rename_file(file, name)
            self.post_message(FileRenamed(file, old_path))

        self.app.push_screen(FileNameScreen(f"Rename {file.name}", rename, initial=file.name))

    def _confirm_delete(self: "FileBrowserView", file: FileRecord) -> None:
        def confirmed(result) -> None:
            if result:
                self.run_worker(self._remove(file), group="file-io", exit_on_error=False)

        self.app.push_screen(ConfirmDeleteScreen(file.name), confirmed)

    async def _remove(self: "FileBrowserView", file: FileRecord) -> None:
        try:
            await self.repository.remove_file(file)
        except FileOperationError as e:
            logger.error(f"🗑️ Removing {file.path} failed: {e}")
            self._show_error(e)
            return
        self.post_message(FileRemoved(file))
