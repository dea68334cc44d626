"""
Selection and lifecycle state for the file browser.

FileBrowserState owns the current selection, the open context menu and the
per-file content baselines used for dirty tracking. It has no Textual
dependency: the view feeds it events (mount, clicks, keys, created/removed
broadcasts, edits) and re-renders when the on_change callback fires.

Selection precedence on initialize():
    previously stored selection > root file > first file > none
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Coroutine, Dict, List, Optional, Protocol, Set

from filepane.config.constants import CURRENT_FILE_KEY
from filepane.config.selection_store import KeyValueStore
from filepane.exceptions import FilePaneError, FileReadError, FileWriteError, SelectionError
from filepane.models.files import FileRecord, SelectionRecord
from filepane.repository.base import FileRepository

logger = logging.getLogger(__name__)

Dispatch = Callable[[Coroutine[Any, Any, Any]], Any]


class NewFilePrompt(Protocol):
    """Interactive flow that ends with a file-created broadcast."""

    def open(self) -> None:
        ...


@dataclass(frozen=True)
class RowFlags:
    """Display flags for one row, derived from the state on each call."""

    dirty: bool
    current: bool
    geared: bool

    @property
    def classes(self) -> List[str]:
        names = []
        if self.dirty:
            names.append("dirty")
        if self.current:
            names.append("currentfile")
        if self.geared:
            names.append("geared")
        return names


class FileBrowserState:
    """Single-writer state machine behind the file browser pane."""

    def __init__(
        self,
        repository: FileRepository,
        store: KeyValueStore,
        prompt: NewFilePrompt,
        *,
        dispatch: Optional[Dispatch] = None,
        on_error: Optional[Callable[[FilePaneError], None]] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        """Initialize the state.

        Args:
            repository: Source of the file list, loads and saves
            store: Persistent store for the last selected file
            prompt: New-file prompt opened when there is nothing to select
            dispatch: Schedules load/save coroutines; defaults to a task on
                the running loop
            on_error: Receives load/save failures
            on_change: Called after every state transition
        """
        self.repository = repository
        self.store = store
        self.prompt = prompt
        self._dispatch = dispatch or self._schedule
        self._on_error = on_error
        self._on_change = on_change
        self._tasks: Set["asyncio.Task[Any]"] = set()

        self.selected_file: Optional[FileRecord] = None
        self.context_menu_path: Optional[str] = None

        # Contents at last load/save, keyed by path
        self._baselines: Dict[str, Optional[str]] = {}
        self._loading: Set[str] = set()

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def file_list(self) -> List[FileRecord]:
        return self.repository.children

    @property
    def root_file(self) -> Optional[FileRecord]:
        for file in self.file_list:
            if file.root:
                return file
        return None

    def row_flags(self, file: FileRecord) -> RowFlags:
        return RowFlags(
            dirty=file.dirty,
            current=self.selected_file is file,
            geared=self.context_menu_path is not None and self.context_menu_path == file.path,
        )

    def is_listed(self, file: FileRecord) -> bool:
        return any(child is file for child in self.file_list)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Pick the initial selection, or ask for a new file if there is none."""
        candidate = self._previous_file() or self.root_file
        if candidate is None and self.file_list:
            candidate = self.file_list[0]

        logger.info(f"🗂️ Initial selection: {candidate!r} of {len(self.file_list)} files")
        if candidate is not None:
            self.select_file(candidate)

        if not self.file_list:
            self.prompt.open()

    def _previous_file(self) -> Optional[FileRecord]:
        record = SelectionRecord.from_json(self.store.get(CURRENT_FILE_KEY))
        if record is None:
            return None
        previous = self.repository.get_by_path(record.path)
        if previous is None:
            logger.debug(f"Stored selection {record.path} no longer exists")
            return None
        if not previous.is_file or not self.is_listed(previous):
            logger.debug(f"Stored selection {record.path} is not a listed file")
            return None
        return previous

    def select_file(self, file: FileRecord) -> None:
        """Make file the current file.

        The store write happens before returning; loading the contents is
        dispatched and finishes later.

        Raises:
            SelectionError: If file is not a file in the current list
        """
        if not self.is_listed(file):
            raise SelectionError(path=file.path)
        if not file.is_file:
            raise SelectionError("Only files can be selected", path=file.path)
        self._select(file)

    def _select(self, file: FileRecord) -> None:
        self.selected_file = file
        self.store.set(CURRENT_FILE_KEY, SelectionRecord.for_file(file).to_json())
        self._baselines.setdefault(file.path, file.contents)

        if not file.loaded:
            self._request_load(file)

        self._changed()

    def _request_load(self, file: FileRecord) -> None:
        if file.path in self._loading:
            return
        self._loading.add(file.path)
        self._dispatch(self._load(file))

    async def _load(self, file: FileRecord) -> None:
        try:
            await self.repository.load_file(file)
        except Exception as e:
            logger.error(f"📄 Loading {file.path} failed: {e}")
            self._report(e, FileReadError, file)
            return
        finally:
            self._loading.discard(file.path)

        if not self.is_listed(file):
            logger.debug(f"Ignoring load of removed file {file.path}")
            return

        self._baselines[file.path] = file.contents
        file.dirty = False
        self._changed()

    # ------------------------------------------------------------------
    # Dirty tracking and saving
    # ------------------------------------------------------------------

    def mark_possibly_dirty(self, file: FileRecord, contents: Optional[str] = None) -> None:
        """Content-changed hook; call on every edit.

        Args:
            file: The edited record
            contents: New contents, assigned to the record when given
        """
        baseline = self._baselines.setdefault(file.path, file.contents)
        if contents is not None:
            file.contents = contents

        dirty = file.contents != baseline
        if dirty != file.dirty:
            file.dirty = dirty
            self._changed()

    async def save_file(self, file: FileRecord) -> bool:
        """Persist file, clearing dirty on success.

        Returns:
            True if the repository saved the file
        """
        if not self.is_listed(file):
            logger.info(f"💾 Not saving {file.path}, it is no longer listed")
            return False

        snapshot = file.contents
        try:
            await self.repository.save_file(file)
        except Exception as e:
            logger.error(f"💾 Saving {file.path} failed: {e}")
            self._report(e, FileWriteError, file)
            return False

        if not self.is_listed(file):
            logger.info(f"💾 Save finished for removed file {file.path}")
            return False

        self._baselines[file.path] = snapshot
        # Edits made while the save was in flight keep the file dirty
        file.dirty = file.contents != snapshot
        self._changed()
        return True

    async def save_selected(self) -> bool:
        if self.selected_file is None:
            return False
        return await self.save_file(self.selected_file)

    def request_save(self, file: Optional[FileRecord] = None) -> None:
        """Dispatch a save of file (default: the selected file)."""
        target = file or self.selected_file
        if target is None:
            logger.debug("Save requested with nothing selected")
            return
        self._dispatch(self.save_file(target))

    # ------------------------------------------------------------------
    # Lifecycle events
    # ------------------------------------------------------------------

    def handle_file_created(self, file: FileRecord) -> None:
        """Select a newly created file, whether or not the list holds it yet."""
        logger.info(f"✨ File created: {file.path}")
        self._baselines[file.path] = file.contents
        self._select(file)

    def handle_file_removed(self, file: FileRecord) -> None:
        logger.info(f"🗑️ File removed: {file.path}")
        self._baselines.pop(file.path, None)
        if self.context_menu_path == file.path:
            self.context_menu_path = None

        if self.selected_file is not None and self.selected_file.path == file.path:
            if self.file_list:
                self.select_file(self.file_list[0])
                return
            self.selected_file = None
            self.prompt.open()

        self._changed()

    def handle_file_renamed(self, file: FileRecord, old_path: str) -> None:
        logger.info(f"✏️ File renamed: {old_path} -> {file.path}")
        if old_path in self._baselines:
            self._baselines[file.path] = self._baselines.pop(old_path)
        if old_path in self._loading:
            self._loading.discard(old_path)
            self._loading.add(file.path)
        if self.context_menu_path == old_path:
            self.context_menu_path = file.path

        if self.selected_file is file:
            self.store.set(CURRENT_FILE_KEY, SelectionRecord.for_file(file).to_json())

        self._changed()

    # ------------------------------------------------------------------
    # Context menu
    # ------------------------------------------------------------------

    def open_context_menu(self, file: FileRecord) -> None:
        """Open the menu for file, closing any other. Selection is untouched."""
        self.context_menu_path = file.path
        self._changed()

    def close_context_menu(self) -> None:
        if self.context_menu_path is not None:
            self.context_menu_path = None
            self._changed()

    @property
    def context_menu_file(self) -> Optional[FileRecord]:
        if self.context_menu_path is None:
            return None
        return self.repository.get_by_path(self.context_menu_path)

    # ------------------------------------------------------------------

    def _schedule(self, coro: Coroutine[Any, Any, Any]) -> "asyncio.Task[Any]":
        """Run coro on the current loop without awaiting it."""
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _report(self, error: Exception, wrap: type, file: FileRecord) -> None:
        if not isinstance(error, FilePaneError):
            error = wrap(str(error) or wrap.__name__, path=file.path)
        if self._on_error is not None:
            self._on_error(error)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change()
