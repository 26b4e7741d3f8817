"""Unit tests for FileListModel."""

import pytest

from stagecraft.core.diff_cache import DiffCache
from stagecraft.core.file_list import FileListModel
from stagecraft.domain.entities import Direction, FileStatus
from stagecraft.domain.exceptions import CollaboratorError
from tests.helpers.fake_vcs import FakeVCS, entry


@pytest.fixture
def vcs() -> FakeVCS:
    return FakeVCS()


@pytest.fixture
def model(vcs: FakeVCS) -> FileListModel:
    file_list = FileListModel(vcs, DiffCache(vcs))
    file_list.replace_entries(
        [
            entry("a.txt", FileStatus.MODIFIED, staged=False),
            entry("b.txt", FileStatus.ADDED, staged=True),
            entry("c.txt", FileStatus.UNTRACKED, staged=False),
        ]
    )
    return file_list


class TestCursor:
    """Tests for cursor movement and bounds."""

    def test_starts_at_first_entry(self, model: FileListModel) -> None:
        assert model.selected_index == 0
        assert model.selected is not None
        assert model.selected.path == "a.txt"

    def test_move_down_and_up(self, model: FileListModel) -> None:
        model.move_cursor(Direction.DOWN)
        assert model.selected_index == 1
        model.move_cursor(Direction.UP)
        assert model.selected_index == 0

    def test_no_wraparound_at_top(self, model: FileListModel) -> None:
        model.move_cursor(Direction.UP)
        assert model.selected_index == 0

    def test_no_wraparound_at_bottom(self, model: FileListModel) -> None:
        for _ in range(10):
            model.move_cursor(Direction.DOWN)
        assert model.selected_index == 2

    def test_empty_list_has_no_cursor(self, vcs: FakeVCS) -> None:
        empty = FileListModel(vcs, DiffCache(vcs))
        empty.move_cursor(Direction.DOWN)
        empty.move_cursor(Direction.UP)
        assert empty.selected_index is None
        assert empty.selected is None

    def test_cursor_stays_in_bounds_for_any_sequence(self, model: FileListModel) -> None:
        moves = [Direction.DOWN, Direction.DOWN, Direction.DOWN, Direction.UP] * 5
        moves += [Direction.UP] * 7
        for move in moves:
            model.move_cursor(move)
            assert model.selected_index is not None
            assert 0 <= model.selected_index < len(model.entries)


class TestToggleStaged:
    """Tests for staging and unstaging the selected entry."""

    def test_stage_unstaged_entry(self, model: FileListModel, vcs: FakeVCS) -> None:
        updated = model.toggle_staged()

        assert updated is not None and updated.staged is True
        assert model.entries[0].staged is True
        assert vcs.calls == [("stage", "a.txt")]

    def test_unstage_staged_entry(self, model: FileListModel, vcs: FakeVCS) -> None:
        model.move_cursor(Direction.DOWN)
        model.toggle_staged()

        assert model.entries[1].staged is False
        assert vcs.calls == [("unstage", "b.txt")]

    def test_double_toggle_restores_flag(self, model: FileListModel) -> None:
        model.toggle_staged()
        model.toggle_staged()
        assert model.entries[0].staged is False

    def test_failure_leaves_flag_unchanged(self, model: FileListModel, vcs: FakeVCS) -> None:
        vcs.failures["stage"] = "index.lock exists"

        for _ in range(2):
            with pytest.raises(CollaboratorError, match="index.lock exists"):
                model.toggle_staged()

        assert model.entries[0].staged is False

    def test_invalidates_cached_diffs_of_path(self, model: FileListModel, vcs: FakeVCS) -> None:
        model.diff_cache.get_diff("a.txt", False)
        model.diff_cache.get_diff("c.txt", False)

        model.toggle_staged()
        model.diff_cache.get_diff("a.txt", False)
        model.diff_cache.get_diff("c.txt", False)

        assert vcs.calls.count(("diff", "a.txt", False)) == 2
        assert vcs.calls.count(("diff", "c.txt", False)) == 1

    def test_empty_list_is_noop(self, vcs: FakeVCS) -> None:
        empty = FileListModel(vcs, DiffCache(vcs))
        assert empty.toggle_staged() is None
        assert vcs.calls == []


class TestCanCommit:
    def test_true_with_staged_entry(self, model: FileListModel) -> None:
        assert model.can_commit() is True

    def test_false_without_staged_entry(self, model: FileListModel) -> None:
        model.move_cursor(Direction.DOWN)
        model.toggle_staged()
        assert model.can_commit() is False

    def test_false_when_empty(self, vcs: FakeVCS) -> None:
        assert FileListModel(vcs, DiffCache(vcs)).can_commit() is False


class TestReplaceEntries:
    """Tests for cursor reconciliation when a new snapshot arrives."""

    def test_cursor_follows_selected_path_after_reorder(self, model: FileListModel) -> None:
        model.move_cursor(Direction.DOWN)  # b.txt

        model.replace_entries(
            [entry("c.txt"), entry("a.txt"), entry("b.txt", FileStatus.ADDED, staged=True)]
        )

        assert model.selected is not None
        assert model.selected.path == "b.txt"
        assert model.selected_index == 2

    def test_index_clamped_when_selected_path_disappears(self, model: FileListModel) -> None:
        model.move_cursor(Direction.DOWN)
        model.move_cursor(Direction.DOWN)  # c.txt

        model.replace_entries([entry("a.txt"), entry("b.txt")])

        assert model.selected_index == 1

    def test_index_kept_when_selected_path_disappears_in_range(
        self, model: FileListModel
    ) -> None:
        model.move_cursor(Direction.DOWN)  # b.txt

        model.replace_entries([entry("a.txt"), entry("c.txt"), entry("d.txt")])

        assert model.selected_index == 1

    def test_empty_replacement_clears_cursor(self, model: FileListModel) -> None:
        model.replace_entries([])
        assert model.selected_index is None

    def test_cursor_appears_when_list_fills(self, vcs: FakeVCS) -> None:
        file_list = FileListModel(vcs, DiffCache(vcs))
        file_list.replace_entries([])
        file_list.replace_entries([entry("a.txt")])
        assert file_list.selected_index == 0

    def test_staged_flags_taken_from_new_entries(self, model: FileListModel) -> None:
        model.toggle_staged()  # optimistic a.txt staged

        model.replace_entries([entry("a.txt", staged=False)])

        assert model.entries[0].staged is False
