"""FileBrowser view widget - main component combining navigation and actions."""

import logging
from typing import Any, Coroutine, Optional, Tuple

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.message import Message
from textual.widgets import ListView, Static

from filepane.config.selection_store import KeyValueStore, SelectionStore
from filepane.exceptions import FilePaneError
from filepane.models.files import FileRecord
from filepane.repository.base import ManagedFileRepository

from ..context_menu import ContextMenu
from ..file_list import FileList, FileRow
from ..messages import ContextMenuClosed, FileCreated, FileRemoved, FileRenamed, OptionsRequested
from .actions import FileBrowserActions, NewFilePromptLauncher
from .navigation import FileBrowserNavigation
from .state import FileBrowserState

logger = logging.getLogger(__name__)


class FileBrowserView(FileBrowserNavigation, FileBrowserActions, Container):
    """File browser pane.

    This class combines:
    - FileBrowserNavigation: Cursor movement
    - FileBrowserActions: Save, new file and context menu actions

    All selection logic lives in FileBrowserState; the view forwards events
    to it and renders its derived row flags.
    """

    DEFAULT_CSS = """
    FileBrowserView {
        layout: vertical;
        width: 40;
        height: 100%;
        border-right: solid $primary;
    }

    FileBrowserView .breadcrumb {
        height: 1;
        background: $primary;
        color: $text;
        padding: 0 1;
    }

    FileBrowserView FileList {
        height: 1fr;
    }

    FileBrowserView .status-bar {
        height: 1;
        background: $panel;
        color: $text-muted;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("j", "move_down", "Down", show=False),
        Binding("k", "move_up", "Up", show=False),
        Binding("g", "go_top", "Top", show=False),
        Binding("G", "go_bottom", "Bottom", show=False),
        Binding("n", "new_file", "New", show=True),
        Binding("o", "open_options", "Options", show=True),
    ]

    class CurrentFileChanged(Message):
        """The selected file, its load state, or its dirty flag changed.

        Attributes:
            file: The selected file, or None
            reload: True when the file itself or its loaded contents changed
        """

        def __init__(self, file: Optional[FileRecord], reload: bool) -> None:
            super().__init__()
            self.file = file
            self.reload = reload

    def __init__(
        self,
        repository: ManagedFileRepository,
        store: Optional[KeyValueStore] = None,
        title: str = "Files",
        **kwargs,
    ):
        """Initialize file browser.

        Args:
            repository: Repository whose files are listed
            store: Selection store (defaults to the JSON store in the config dir)
            title: Text of the breadcrumb line
        """
        super().__init__(**kwargs)
        self.repository = repository
        self.title_text = title
        self.state = FileBrowserState(
            repository,
            store if store is not None else SelectionStore(),
            NewFilePromptLauncher(self),
            dispatch=self._dispatch,
            on_error=self._show_error,
            on_change=self._on_state_changed,
        )
        self._prompt_open = False
        self._ready = False
        self._shown: Tuple[Optional[int], bool] = (None, False)

    def compose(self) -> ComposeResult:
        yield Static(self.title_text, id="path-breadcrumb", classes="breadcrumb")
        yield FileList(id="file-list")
        yield ContextMenu(id="context-menu")
        yield Static("", id="file-status-bar", classes="status-bar")

    async def on_mount(self) -> None:
        file_list = self.query_one(FileList)
        await file_list.populate(self.state.file_list)
        self._ready = True
        self.state.initialize()
        self._on_state_changed()
        self.highlight_selected()
        file_list.focus()

    def _dispatch(self, coro: Coroutine[Any, Any, Any]) -> None:
        self.run_worker(coro, group="file-io", exit_on_error=False)

    def _show_error(self, error: FilePaneError) -> None:
        if error.retryable:
            self.notify(f"{error.message}, try again", title="File error", severity="warning")
            self.query_one("#file-status-bar", Static).update(f"⚠️ {error}")
        else:
            self.notify(error.message, title="File error", severity="error")
            self.query_one("#file-status-bar", Static).update(f"❌ {error}")

    def _on_state_changed(self) -> None:
        """Re-render everything derived from the state."""
        if not self._ready:
            return
        for row in self.query_one(FileList).rows:
            row.apply_flags(self.state.row_flags(row.record).classes)

        menu = self.query_one(ContextMenu)
        if self.state.context_menu_path is None and menu.is_open:
            menu.hide()

        count = len(self.state.file_list)
        status = f"{count} file{'s' if count != 1 else ''}"
        if self.state.root_file is not None:
            status += f" - root: {self.state.root_file.name}"
        self.query_one("#file-status-bar", Static).update(status)

        selected = self.state.selected_file
        shown = (id(selected) if selected is not None else None, bool(selected and selected.loaded))
        reload = shown != self._shown
        self._shown = shown
        self.post_message(self.CurrentFileChanged(selected, reload))

    # ------------------------------------------------------------------
    # Clicks
    # ------------------------------------------------------------------

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        if isinstance(event.item, FileRow):
            self.state.close_context_menu()
            self.state.select_file(event.item.record)

    def on_options_requested(self, message: OptionsRequested) -> None:
        message.stop()
        self.open_context_menu(message.file)

    def on_context_menu_closed(self, message: ContextMenuClosed) -> None:
        message.stop()
        self.close_context_menu()

    # ------------------------------------------------------------------
    # Lifecycle broadcasts
    # ------------------------------------------------------------------

    async def on_file_created(self, message: FileCreated) -> None:
        await self.query_one(FileList).populate(self.state.file_list)
        self.state.handle_file_created(message.file)
        self.highlight_selected()

    async def on_file_removed(self, message: FileRemoved) -> None:
        await self.query_one(FileList).populate(self.state.file_list)
        self.state.handle_file_removed(message.file)
        self.highlight_selected()

    def on_file_renamed(self, message: FileRenamed) -> None:
        self.state.handle_file_renamed(message.file, message.old_path)
