"""File browser package - the file list pane and its state machine.

This package contains:
- FileBrowserView: Main view widget combining all functionality
- FileBrowserState: Selection/lifecycle state machine (no Textual dependency)
- FileBrowserNavigation: Mixin for cursor movement
- FileBrowserActions: Mixin for save, new file and context menu actions
"""

from .actions import FileBrowserActions, NewFilePromptLauncher
from .navigation import FileBrowserNavigation
from .state import FileBrowserState, NewFilePrompt, RowFlags
from .view import FileBrowserView

__all__ = [
    "FileBrowserView",
    "FileBrowserState",
    "NewFilePrompt",
    "RowFlags",
    "FileBrowserNavigation",
    "FileBrowserActions",
    "NewFilePromptLauncher",
]
