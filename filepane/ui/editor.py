"""Editor pane showing the current file's contents."""

import logging
from typing import Optional

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.message import Message
from textual.widgets import Static, TextArea

from filepane.models.files import FileRecord

logger = logging.getLogger(__name__)


class EditorPane(Vertical):
    """TextArea bound to the selected file.

    Every edit is reported through ContentsEdited so the browser can
    recompute the file's dirty flag.
    """

    DEFAULT_CSS = """
    EditorPane {
        width: 1fr;
        padding: 0 1;
    }

    EditorPane #editor-title {
        height: 1;
        background: $panel;
        color: $text;
        padding: 0 1;
    }

    EditorPane TextArea {
        height: 1fr;
    }
    """

    class ContentsEdited(Message):
        """The text of the shown file changed."""

        def __init__(self, file: FileRecord, contents: str) -> None:
            super().__init__()
            self.file = file
            self.contents = contents

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.file: Optional[FileRecord] = None
        self._pending: Optional[FileRecord] = None

    def compose(self) -> ComposeResult:
        yield Static("No file selected", id="editor-title")
        yield TextArea("", id="editor-text", read_only=True)

    def on_mount(self) -> None:
        if self._pending is not None:
            self.show_file(self._pending)
            self._pending = None

    def show_file(self, file: Optional[FileRecord]) -> None:
        """Display file; unloaded files show a placeholder until loaded."""
        try:
            text_area = self.query_one("#editor-text", TextArea)
        except NoMatches:
            # Not composed yet, on_mount shows it
            self._pending = file
            return
        if file is None or not file.loaded:
            self.file = None
            text_area.read_only = True
            text_area.load_text("Loading..." if file is not None else "")
        else:
            self.file = file
            text_area.read_only = False
            text_area.load_text(file.contents or "")
        self.update_title(file)

    def update_title(self, file: Optional[FileRecord]) -> None:
        try:
            title_bar = self.query_one("#editor-title", Static)
        except NoMatches:
            return
        if file is None:
            title = "No file selected"
        else:
            title = f"{file.path}{' ●' if file.dirty else ''}"
        title_bar.update(title)

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        event.stop()
        if self.file is None:
            return
        text = event.text_area.text
        if text != self.file.contents:
            self.post_message(self.ContentsEdited(self.file, text))
