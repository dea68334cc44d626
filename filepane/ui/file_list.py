"""File list widget for the file browser."""

import logging
from typing import List

from textual import events
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.css.query import NoMatches
from textual.widgets import Label, ListItem, ListView, Static

from filepane.models.files import FileRecord

from .messages import OptionsRequested

logger = logging.getLogger(__name__)

# File extension to icon mapping for get_file_icon()
_EXT_ICONS = {
    ".raml": "📐",
    ".yaml": "📊", ".yml": "📊", ".json": "📊", ".toml": "📊",
    ".md": "📝", ".markdown": "📝",
    ".txt": "📄", ".text": "📄",
    ".py": "🐍",
    ".js": "📜", ".ts": "📜",
    ".xml": "📋",
    ".sh": "🔨",
}


def get_file_icon(file: FileRecord) -> str:
    """Return emoji icon for file type."""
    if file.root:
        return "🏠"
    dot = file.name.rfind(".")
    ext = file.name[dot:].lower() if dot > 0 else ""
    return _EXT_ICONS.get(ext, "📄")


class OptionsIcon(Static):
    """The gear control that opens a row's context menu."""

    def __init__(self, record: FileRecord, **kwargs):
        super().__init__("⚙", **kwargs)
        self.record = record

    def on_click(self, event: events.Click) -> None:
        # Keep the click away from the row so it does not select the file
        event.stop()
        event.prevent_default()
        self.post_message(OptionsRequested(self.record))


class FileRow(ListItem):
    """One file in the list: icon, name, dirty marker and gear control."""

    def __init__(self, record: FileRecord, **kwargs):
        super().__init__(classes="file-item", **kwargs)
        self.record = record

    def compose(self) -> ComposeResult:
        with Horizontal(classes="file-row"):
            yield Label(self._label_text(), classes="file-name")
            yield OptionsIcon(self.record, classes="file-options")

    def _label_text(self) -> str:
        marker = " ●" if self.record.dirty else ""
        return f"{get_file_icon(self.record)} {self.record.name}{marker}"

    def apply_flags(self, classes: List[str]) -> None:
        """Set the derived dirty/currentfile/geared classes and label."""
        for name in ("dirty", "currentfile", "geared"):
            self.set_class(name in classes, name)
        try:
            self.query_one(".file-name", Label).update(self._label_text())
        except NoMatches:
            # Not composed yet; compose() renders the current label
            pass


class FileList(ListView):
    """Flat list of the repository's files."""

    DEFAULT_CSS = """
    FileList .file-row {
        height: 1;
    }

    FileList .file-name {
        width: 1fr;
    }

    FileList .file-options {
        width: 3;
        color: $text-muted;
    }

    FileList .currentfile {
        text-style: bold;
        background: $primary 30%;
    }

    FileList .dirty .file-name {
        color: $warning;
    }

    FileList .geared .file-options {
        color: $accent;
        text-style: bold;
    }
    """

    @property
    def rows(self) -> List[FileRow]:
        return [row for row in self.children if isinstance(row, FileRow)]

    async def populate(self, records: List[FileRecord]) -> None:
        """Replace all rows with one row per record."""
        await self.clear()
        await self.extend(FileRow(record) for record in records)
        logger.info(f"📁 File list populated with {len(records)} rows")
