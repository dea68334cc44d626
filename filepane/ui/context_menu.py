"""Per-file context menu for the file browser."""

import logging
from typing import Optional

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Label, OptionList
from textual.widgets.option_list import Option

from filepane.models.files import FileRecord

from .messages import ContextMenuAction, ContextMenuClosed

logger = logging.getLogger(__name__)

MENU_ACTIONS = [
    ("save", "💾 Save"),
    ("rename", "✏️ Rename"),
    ("delete", "🗑️ Delete"),
]


class ContextMenu(Vertical):
    """Menu of actions for one file. Hidden until shown for a file."""

    DEFAULT_CSS = """
    ContextMenu {
        height: auto;
        border: round $accent;
        padding: 0 1;
        display: none;
    }

    ContextMenu.open {
        display: block;
    }

    ContextMenu #context-menu-title {
        text-style: bold;
        color: $accent;
    }

    ContextMenu OptionList {
        height: auto;
        border: none;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close", show=False),
    ]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.file: Optional[FileRecord] = None

    def compose(self) -> ComposeResult:
        yield Label("", id="context-menu-title")
        yield OptionList(*[Option(label, id=action) for action, label in MENU_ACTIONS])

    @property
    def is_open(self) -> bool:
        return self.has_class("open")

    def show_for(self, file: FileRecord) -> None:
        """Open the menu scoped to file, replacing any file it was open for."""
        self.file = file
        self.query_one("#context-menu-title", Label).update(file.name)
        self.add_class("open")
        options = self.query_one(OptionList)
        options.highlighted = 0
        options.focus()

    def hide(self) -> None:
        self.file = None
        self.remove_class("open")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        event.stop()
        if self.file is None:
            return
        logger.info(f"Context menu action {event.option.id} for {self.file.path}")
        self.post_message(ContextMenuAction(self.file, event.option.id or ""))

    def action_close(self) -> None:
        self.post_message(ContextMenuClosed())
