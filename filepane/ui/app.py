"""Textual application hosting the file browser and editor panes."""

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header

from filepane.config.selection_store import KeyValueStore
from filepane.repository.base import ManagedFileRepository

from .editor import EditorPane
from .file_browser import FileBrowserView

logger = logging.getLogger(__name__)
key_logger = logging.getLogger("key_events")


class FilePaneApp(App[None]):
    """File browser on the left, editor of the current file on the right."""

    TITLE = "filepane"

    CSS = """
    #main-panes {
        height: 1fr;
    }
    """

    # Priority bindings fire whichever widget has focus
    BINDINGS = [
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("super+s", "save", "Save", show=False, priority=True),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(
        self,
        repository: ManagedFileRepository,
        store: Optional[KeyValueStore] = None,
        title: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.repository = repository
        self.store = store
        self.browser_title = title or "Files"

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-panes"):
            yield FileBrowserView(self.repository, self.store, title=self.browser_title, id="file-browser")
            yield EditorPane(id="editor")
        yield Footer()

    @property
    def browser(self) -> FileBrowserView:
        return self.query_one("#file-browser", FileBrowserView)

    def action_save(self) -> None:
        key_logger.info("Save chord pressed")
        self.browser.action_save()

    def on_file_browser_view_current_file_changed(
        self, message: FileBrowserView.CurrentFileChanged
    ) -> None:
        editor = self.query_one("#editor", EditorPane)
        if message.reload:
            editor.show_file(message.file)
        else:
            editor.update_title(message.file)

    def on_editor_pane_contents_edited(self, message: EditorPane.ContentsEdited) -> None:
        self.browser.state.mark_possibly_dirty(message.file, message.contents)
