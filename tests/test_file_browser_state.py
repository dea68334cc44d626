"""Tests for the file browser selection/lifecycle state machine."""

import asyncio
import json
from unittest.mock import MagicMock

import pytest

from conftest import FakeRepository, make_file
from filepane.config.constants import CURRENT_FILE_KEY
from filepane.exceptions import FileReadError, FileWriteError, SelectionError
from filepane.models.files import FileRecord, FileType
from filepane.ui.file_browser.state import FileBrowserState, RowFlags


def stored_selection(store):
    return json.loads(store.get(CURRENT_FILE_KEY))


def remember(store, file):
    store.set(CURRENT_FILE_KEY, json.dumps({"name": file.name, "path": file.path}))


class TestInitialization:
    """Initial selection precedence and the empty state."""

    def test_root_file_property(self, make_state):
        root = make_file("api.raml", root=True)
        state = make_state([root])
        state.initialize()

        assert state.root_file is root

    def test_no_root_file(self, make_state):
        state = make_state([make_file("api.raml")])
        state.initialize()

        assert state.root_file is None

    def test_selects_first_file(self, make_state):
        state = make_state([make_file("firstFile"), make_file("lastFile")])
        state.initialize()

        assert state.selected_file.name == "firstFile"

    def test_selects_previously_selected_file(self, make_state, store):
        files = [make_file("lastFile"), make_file("firstFile")]
        remember(store, files[0])
        state = make_state(files)
        state.initialize()

        assert state.selected_file.name == "lastFile"
        state.repository.get_by_path.assert_called_with("/lastFile")

    def test_prefers_root_over_first_file(self, make_state):
        root = make_file("2.raml", root=True)
        state = make_state([make_file("1.raml"), root])
        state.initialize()

        assert state.selected_file is root

    def test_prefers_previous_over_root_and_first(self, make_state, store):
        files = [make_file("1.raml"), make_file("2.raml"), make_file("3.raml", root=True)]
        remember(store, files[0])
        state = make_state(files)
        state.initialize()

        assert state.selected_file is files[0]
        state.repository.get_by_path.assert_called_with("/1.raml")

    def test_previous_file_beats_root_in_any_position(self, make_state, store):
        x, y, z = make_file("x"), make_file("y"), make_file("z", root=True)
        remember(store, y)
        state = make_state([x, y, z])
        state.initialize()

        assert state.selected_file is y

    def test_prompts_for_new_file_when_empty(self, make_state, prompt):
        state = make_state([])
        state.initialize()

        prompt.open.assert_called_once()
        assert state.selected_file is None

    def test_does_not_prompt_when_files_exist(self, make_state, prompt):
        make_state([make_file("a")]).initialize()

        prompt.open.assert_not_called()

    @pytest.mark.parametrize("raw", ["not json", "[]", '{"name": "a"}', '{"name": 1, "path": 2}'])
    def test_malformed_selection_falls_back_to_first(self, make_state, store, raw):
        store.set(CURRENT_FILE_KEY, raw)
        state = make_state([make_file("a"), make_file("b")])
        state.initialize()

        assert state.selected_file.name == "a"

    def test_unknown_stored_path_falls_back_to_root(self, make_state, store):
        root = make_file("api.raml", root=True)
        store.set(CURRENT_FILE_KEY, json.dumps({"name": "gone", "path": "/gone"}))
        state = make_state([make_file("a"), root])
        state.initialize()

        assert state.selected_file is root

    def test_stored_directory_falls_back_to_first(self, make_state, store):
        directory = FileRecord(name="dir", path="/dir", type=FileType.DIRECTORY)
        store.set(CURRENT_FILE_KEY, json.dumps({"name": "dir", "path": "/dir"}))
        state = make_state([make_file("a"), make_file("b")])
        state.repository.get_by_path = MagicMock(return_value=directory)
        state.initialize()

        assert state.selected_file.name == "a"

    def test_stored_unlisted_record_falls_back_to_root(self, make_state, store):
        root = make_file("api.raml", root=True)
        remember(store, make_file("stray"))
        state = make_state([make_file("a"), root])
        state.repository.get_by_path = MagicMock(return_value=make_file("stray"))
        state.initialize()

        assert state.selected_file is root

    def test_initial_selection_is_persisted(self, make_state, store):
        make_state([make_file("a"), make_file("b")]).initialize()

        assert stored_selection(store) == {"name": "a", "path": "/a"}


class TestSelectFile:
    """Click selection, persistence and content loading."""

    def test_updates_selected_file_and_store(self, make_state, store):
        files = [make_file("file1"), make_file("file2")]
        state = make_state(files)
        state.initialize()

        state.select_file(files[1])

        assert state.selected_file.name == "file2"
        assert stored_selection(store) == {"name": "file2", "path": "/file2"}

    @pytest.mark.asyncio
    async def test_loads_unloaded_file(self, make_state, dispatcher):
        files = [make_file("file1"), make_file("file2")]
        state = make_state(files)

        state.select_file(files[1])
        assert files[1].loaded is False
        await dispatcher.run_all()

        state.repository.load_file.assert_awaited_once_with(files[1])
        assert files[1].loaded is True
        assert files[1].contents == "contents of file2"

    def test_does_not_load_loaded_file(self, make_state, dispatcher):
        loaded = make_file("file2", loaded=True, contents="raml")
        state = make_state([make_file("file1"), loaded])

        state.select_file(loaded)

        assert dispatcher.pending == []
        state.repository.load_file.assert_not_called()

    @pytest.mark.asyncio
    async def test_reselecting_loads_once(self, make_state, dispatcher, store):
        file = make_file("a")
        state = make_state([file])

        state.select_file(file)
        await dispatcher.run_all()
        state.select_file(file)
        await dispatcher.run_all()

        assert state.repository.load_file.await_count == 1
        assert stored_selection(store)["path"] == "/a"

    def test_pending_load_is_not_requested_twice(self, make_state, dispatcher):
        file = make_file("a")
        state = make_state([file])

        state.select_file(file)
        state.select_file(file)

        assert len(dispatcher.pending) == 1

    def test_rejects_unlisted_file(self, make_state):
        state = make_state([make_file("a")])

        with pytest.raises(SelectionError):
            state.select_file(make_file("a"))

    def test_exactly_one_current_row(self, make_state):
        files = [make_file("a"), make_file("b"), make_file("c")]
        state = make_state(files)
        state.initialize()
        state.select_file(files[2])

        current = [f.name for f in files if state.row_flags(f).current]
        assert current == ["c"]

    @pytest.mark.asyncio
    async def test_failed_load_is_reported(self, make_state, dispatcher):
        errors = []
        file = make_file("a")
        state = make_state([file], on_error=errors.append)
        state.repository.load_file.side_effect = OSError("disk gone")

        state.select_file(file)
        await dispatcher.run_all()

        assert state.selected_file is file
        assert file.loaded is False
        assert len(errors) == 1
        assert isinstance(errors[0], FileReadError)

    @pytest.mark.asyncio
    async def test_load_can_be_retried_after_failure(self, make_state, dispatcher):
        file = make_file("a")
        state = make_state([file])
        state.repository.load_file.side_effect = [OSError("flaky"), None]

        state.select_file(file)
        await dispatcher.run_all()
        state.select_file(file)
        await dispatcher.run_all()

        assert state.repository.load_file.await_count == 2


class TestDirtyTracking:
    """Dirty derivation from content changes and saves."""

    @pytest.mark.asyncio
    async def test_marks_selected_file_dirty_when_contents_change(self, make_state, dispatcher):
        file = make_file("clean")
        state = make_state([file])
        state.select_file(file)
        await dispatcher.run_all()

        assert file.dirty is False

        state.mark_possibly_dirty(file, "dirty content")

        assert file.dirty is True
        assert file.contents == "dirty content"

    @pytest.mark.asyncio
    async def test_unchanged_contents_stay_clean(self, make_state, dispatcher):
        file = make_file("a")
        state = make_state([file])
        state.select_file(file)
        await dispatcher.run_all()

        state.mark_possibly_dirty(file, "contents of a")

        assert file.dirty is False

    @pytest.mark.asyncio
    async def test_reverting_edit_clears_dirty(self, make_state, dispatcher):
        file = make_file("a")
        state = make_state([file])
        state.select_file(file)
        await dispatcher.run_all()

        state.mark_possibly_dirty(file, "edited")
        state.mark_possibly_dirty(file, "contents of a")

        assert file.dirty is False

    def test_in_place_mutation_is_detected(self, make_state):
        file = make_file("a", loaded=True, contents="one")
        state = make_state([file])
        state.select_file(file)

        file.contents = "two"
        state.mark_possibly_dirty(file)

        assert file.dirty is True

    @pytest.mark.asyncio
    async def test_save_resets_dirty(self, make_state):
        file = make_file("a", loaded=True, contents="one")
        state = make_state([file])
        state.select_file(file)
        state.mark_possibly_dirty(file, "two")

        assert await state.save_selected() is True

        state.repository.save_file.assert_awaited_once_with(file)
        assert file.dirty is False
        # the saved contents are the new baseline
        state.mark_possibly_dirty(file, "two")
        assert file.dirty is False

    @pytest.mark.asyncio
    async def test_failed_save_keeps_dirty(self, make_state):
        errors = []
        file = make_file("a", loaded=True, contents="one")
        state = make_state([file], on_error=errors.append)
        state.repository.save_file.side_effect = FileWriteError(path=file.path)
        state.select_file(file)
        state.mark_possibly_dirty(file, "two")

        assert await state.save_selected() is False

        assert file.dirty is True
        assert isinstance(errors[0], FileWriteError)

    @pytest.mark.asyncio
    async def test_non_filepane_save_error_is_wrapped(self, make_state):
        errors = []
        file = make_file("a", loaded=True, contents="one")
        state = make_state([file], on_error=errors.append)
        state.repository.save_file.side_effect = RuntimeError("boom")
        state.select_file(file)

        await state.save_selected()

        assert isinstance(errors[0], FileWriteError)
        assert "boom" in str(errors[0])

    @pytest.mark.asyncio
    async def test_edits_during_save_keep_file_dirty(self, make_state):
        file = make_file("a", loaded=True, contents="one")
        state = make_state([file])
        state.select_file(file)
        state.mark_possibly_dirty(file, "two")

        async def edit_while_saving(saved):
            saved.contents = "three"

        state.repository.save_file.side_effect = edit_while_saving
        await state.save_selected()

        assert file.dirty is True

    @pytest.mark.asyncio
    async def test_save_without_selection_is_noop(self, make_state):
        state = make_state([])

        assert await state.save_selected() is False
        state.repository.save_file.assert_not_called()

    @pytest.mark.asyncio
    async def test_save_finishing_after_removal_is_noop(self, make_state):
        file = make_file("a", loaded=True, contents="one")
        other = make_file("b", loaded=True, contents="x")
        state = make_state([file, other])
        state.select_file(file)
        state.mark_possibly_dirty(file, "two")

        async def removed_while_saving(saved):
            state.repository.children.remove(saved)
            state.handle_file_removed(saved)

        state.repository.save_file.side_effect = removed_while_saving

        assert await state.save_file(file) is False
        assert state.selected_file is other

    @pytest.mark.asyncio
    async def test_request_save_dispatches_selected(self, make_state, dispatcher):
        file = make_file("a", loaded=True, contents="one")
        state = make_state([file])
        state.select_file(file)

        state.request_save()
        await dispatcher.run_all()

        state.repository.save_file.assert_awaited_once_with(file)

    def test_request_save_without_selection(self, make_state, dispatcher):
        make_state([]).request_save()

        assert dispatcher.pending == []

    def test_dirty_row_flag(self, make_state):
        file = make_file("dirty", dirty=True)
        state = make_state([file, make_file("saved")])

        assert state.row_flags(file).dirty is True
        assert state.row_flags(state.file_list[1]).dirty is False


class TestLifecycleEvents:
    """Created/removed/renamed broadcasts."""

    def test_created_file_is_selected(self, make_state, prompt):
        state = make_state([])
        state.initialize()
        prompt.open.reset_mock()

        new_file = make_file("filenameOfTheNewFile", loaded=True, contents="")
        state.repository.children.append(new_file)
        state.handle_file_created(new_file)

        assert state.selected_file.name == "filenameOfTheNewFile"
        prompt.open.assert_not_called()

    def test_created_file_outside_list_is_selected(self, make_state, store, prompt):
        state = make_state([])
        state.initialize()
        prompt.open.reset_mock()

        state.handle_file_created(make_file("filenameOfTheNewFile"))

        assert state.selected_file.name == "filenameOfTheNewFile"
        assert stored_selection(store) == {
            "name": "filenameOfTheNewFile",
            "path": "/filenameOfTheNewFile",
        }
        prompt.open.assert_not_called()

    def test_created_file_starts_clean(self, make_state):
        state = make_state([])
        new_file = make_file("new", loaded=True, contents="")
        state.repository.children.append(new_file)
        state.handle_file_created(new_file)

        state.mark_possibly_dirty(new_file, "")
        assert new_file.dirty is False

    def test_removing_selected_selects_first_remaining(self, make_state):
        files = [make_file("some.raml"), make_file("old.raml")]
        state = make_state(files)
        state.select_file(files[1])

        removed = state.repository.children.pop()
        state.handle_file_removed(removed)

        assert state.selected_file.name == "some.raml"

    def test_removing_selected_matches_by_path(self, make_state):
        state = make_state([make_file("some.raml")])
        state.selected_file = make_file("old.raml")

        state.handle_file_removed(make_file("old.raml"))

        assert state.selected_file.name == "some.raml"

    def test_removing_last_file_prompts(self, make_state, prompt):
        state = make_state([make_file("some.raml")])
        state.initialize()

        removed = state.repository.children.pop()
        state.handle_file_removed(removed)

        assert state.selected_file is None
        prompt.open.assert_called_once()

    def test_removing_unselected_keeps_selection(self, make_state, prompt):
        files = [make_file("a"), make_file("b")]
        state = make_state(files)
        state.select_file(files[0])

        state.repository.children.remove(files[1])
        state.handle_file_removed(files[1])

        assert state.selected_file is files[0]
        prompt.open.assert_not_called()

    def test_removing_geared_file_closes_menu(self, make_state):
        files = [make_file("a"), make_file("b")]
        state = make_state(files)
        state.select_file(files[0])
        state.open_context_menu(files[1])

        state.repository.children.remove(files[1])
        state.handle_file_removed(files[1])

        assert state.context_menu_path is None

    def test_renaming_selected_rewrites_store(self, make_state, store):
        file = make_file("old.raml")
        state = make_state([file])
        state.select_file(file)

        file.name, file.path = "new.raml", "/new.raml"
        state.handle_file_renamed(file, "/old.raml")

        assert stored_selection(store) == {"name": "new.raml", "path": "/new.raml"}

    def test_renaming_other_file_keeps_store(self, make_state, store):
        files = [make_file("a"), make_file("b")]
        state = make_state(files)
        state.select_file(files[0])

        files[1].name, files[1].path = "c", "/c"
        state.handle_file_renamed(files[1], "/b")

        assert stored_selection(store)["path"] == "/a"

    def test_rename_moves_context_menu(self, make_state):
        file = make_file("a")
        state = make_state([file])
        state.open_context_menu(file)

        file.name, file.path = "b", "/b"
        state.handle_file_renamed(file, "/a")

        assert state.row_flags(file).geared is True

    def test_click_then_remove_scenario(self, make_state, store):
        first, last = make_file("first"), make_file("last")
        state = make_state([first, last])
        state.initialize()
        assert state.selected_file.name == "first"

        state.select_file(last)
        assert state.selected_file.name == "last"
        assert json.loads(store.get(CURRENT_FILE_KEY)) == {"name": "last", "path": "/last"}

        state.repository.children.remove(last)
        state.handle_file_removed(last)
        assert state.selected_file.name == "first"


class TestContextMenu:
    """Context menu state and row flags."""

    def test_opening_menu_does_not_select_or_load(self, make_state, dispatcher):
        files = [make_file("file1"), make_file("file2")]
        state = make_state(files)
        state.initialize()
        dispatcher.close()

        state.open_context_menu(files[1])

        assert state.selected_file.name == "file1"
        assert dispatcher.pending == []
        assert state.row_flags(files[1]) == RowFlags(dirty=False, current=False, geared=True)

    def test_at_most_one_menu_open(self, make_state):
        files = [make_file("a"), make_file("b")]
        state = make_state(files)

        state.open_context_menu(files[0])
        state.open_context_menu(files[1])

        geared = [f.name for f in files if state.row_flags(f).geared]
        assert geared == ["b"]
        assert state.context_menu_file is files[1]

    def test_close_menu(self, make_state):
        file = make_file("a")
        state = make_state([file])
        state.open_context_menu(file)

        state.close_context_menu()

        assert state.row_flags(file).geared is False
        assert state.context_menu_file is None

    def test_row_flag_classes(self):
        flags = RowFlags(dirty=True, current=True, geared=False)

        assert flags.classes == ["dirty", "currentfile"]


class TestChangeNotification:
    """on_change fires after transitions."""

    def test_select_notifies(self, store, prompt, dispatcher):
        on_change = MagicMock()
        file = make_file("a", loaded=True, contents="")
        state = FileBrowserState(
            FakeRepository([file]), store, prompt, dispatch=dispatcher, on_change=on_change
        )

        state.select_file(file)

        on_change.assert_called()

    def test_unchanged_dirty_does_not_notify(self, store, prompt, dispatcher):
        on_change = MagicMock()
        file = make_file("a", loaded=True, contents="x")
        state = FileBrowserState(
            FakeRepository([file]), store, prompt, dispatch=dispatcher, on_change=on_change
        )
        state.select_file(file)
        on_change.reset_mock()

        state.mark_possibly_dirty(file, "x")

        on_change.assert_not_called()


class TestDefaultDispatch:
    """Without a dispatcher, loads run as tasks owned by the state."""

    @pytest.mark.asyncio
    async def test_tasks_belong_to_their_state(self, store, prompt):
        repository = FakeRepository([make_file("a")])
        state = FileBrowserState(repository, store, prompt)
        other = FileBrowserState(FakeRepository([make_file("b")]), store, prompt)

        state.initialize()

        assert len(state._tasks) == 1
        assert other._tasks == set()

        await asyncio.gather(*state._tasks)
        await asyncio.sleep(0)

        assert repository.children[0].loaded is True
        assert state._tasks == set()
