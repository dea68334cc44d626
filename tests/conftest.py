"""Shared pytest fixtures for filepane tests."""

from typing import Any, Callable, Coroutine, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from filepane.config.selection_store import SelectionStore
from filepane.models.files import FileRecord
from filepane.ui.file_browser.state import FileBrowserState


def make_file(name: str, **options: Any) -> FileRecord:
    """Build a file record the way the repository lists it."""
    return FileRecord(
        name=name,
        path=f"/{name}",
        root=bool(options.get("root", False)),
        dirty=bool(options.get("dirty", False)),
        loaded=bool(options.get("loaded", False)),
        contents=options.get("contents"),
    )


class FakeRepository:
    """In-memory repository with spies on every operation."""

    def __init__(self, children: Optional[List[FileRecord]] = None):
        self.children: List[FileRecord] = list(children or [])
        self.get_by_path = MagicMock(side_effect=self._get_by_path)
        self.load_file = AsyncMock(side_effect=self._load)
        self.save_file = AsyncMock(return_value=None)

    def _get_by_path(self, path: str) -> Optional[FileRecord]:
        for child in self.children:
            if child.path == path:
                return child
        return None

    async def _load(self, file: FileRecord) -> None:
        if file.contents is None:
            file.contents = f"contents of {file.name}"
        file.loaded = True

    async def create_file(self, name: str, contents: str = "") -> FileRecord:
        record = make_file(name, loaded=True, contents=contents)
        self.children.append(record)
        return record

    async def remove_file(self, file: FileRecord) -> None:
        self.children.remove(file)

    async def rename_file(self, file: FileRecord, new_name: str) -> str:
        old_path = file.path
        file.name = new_name
        file.path = f"/{new_name}"
        return old_path


class Dispatcher:
    """Collects dispatched coroutines so tests decide when they run."""

    def __init__(self) -> None:
        self.pending: List[Coroutine[Any, Any, Any]] = []

    def __call__(self, coro: Coroutine[Any, Any, Any]) -> None:
        self.pending.append(coro)

    async def run_all(self) -> None:
        while self.pending:
            await self.pending.pop(0)

    def close(self) -> None:
        for coro in self.pending:
            coro.close()
        self.pending.clear()


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep the real ~/.config/filepane out of every test."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("FILEPANE_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def store(tmp_path) -> SelectionStore:
    return SelectionStore(tmp_path / "state.json")


@pytest.fixture
def prompt() -> MagicMock:
    return MagicMock(name="new_file_prompt")


@pytest.fixture
def dispatcher():
    dispatch = Dispatcher()
    yield dispatch
    dispatch.close()


@pytest.fixture
def make_state(store, prompt, dispatcher) -> Callable[..., FileBrowserState]:
    """Factory building a state over a FakeRepository of the given files."""

    def _make(files: Optional[List[FileRecord]] = None, **kwargs: Any) -> FileBrowserState:
        repository = FakeRepository(files)
        return FileBrowserState(repository, store, prompt, dispatch=dispatcher, **kwargs)

    return _make
