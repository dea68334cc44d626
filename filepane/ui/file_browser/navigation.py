"""Navigation mixin for FileBrowser - handles cursor movement in the list."""

import logging
from typing import TYPE_CHECKING

from ..file_list import FileList

if TYPE_CHECKING:
    from .view import FileBrowserView

logger = logging.getLogger(__name__)


class FileBrowserNavigation:
    """Mixin providing navigation functionality for FileBrowser.

    Moving the cursor only highlights a row; enter or a click selects it.
    """

    def action_move_down(self: "FileBrowserView") -> None:
        """Move highlight down."""
        self.query_one(FileList).action_cursor_down()

    def action_move_up(self: "FileBrowserView") -> None:
        """Move highlight up."""
        self.query_one(FileList).action_cursor_up()

    def action_go_top(self: "FileBrowserView") -> None:
        """Go to first item."""
        file_list = self.query_one(FileList)
        if file_list.rows:
            file_list.index = 0

    def action_go_bottom(self: "FileBrowserView") -> None:
        """Go to last item."""
        file_list = self.query_one(FileList)
        if file_list.rows:
            file_list.index = len(file_list.rows) - 1

    def highlight_selected(self: "FileBrowserView") -> None:
        """Put the list cursor on the selected file's row."""
        selected = self.state.selected_file
        if selected is None:
            return
        file_list = self.query_one(FileList)
        for index, row in enumerate(file_list.rows):
            if row.record is selected:
                file_list.index = index
                return
