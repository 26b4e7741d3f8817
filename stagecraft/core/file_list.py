"""File list model.

Owns the ordered file entries shown in the file list, the selection cursor,
and each entry's staged flag.
"""

import logging

from stagecraft.core.diff_cache import DiffCache
from stagecraft.domain.entities import Direction, FileEntry
from stagecraft.ports.vcs import VCS

logger = logging.getLogger(__name__)


class FileListModel:
    """File entries plus a selection cursor that never leaves the list.

    The cursor is None exactly when the list is empty.
    """

    def __init__(self, vcs: VCS, diff_cache: DiffCache) -> None:
        self.vcs = vcs
        self.diff_cache = diff_cache
        self.entries: list[FileEntry] = []
        self.selected_index: int | None = None

    @property
    def selected(self) -> FileEntry | None:
        """Entry under the cursor, or None if the list is empty."""
        if self.selected_index is None:
            return None
        return self.entries[self.selected_index]

    def move_cursor(self, direction: Direction) -> None:
        """Move the cursor one entry up or down, stopping at either end.

        Args:
            direction: Direction.UP or Direction.DOWN.
        """
        if self.selected_index is None:
            return

        step = -1 if direction == Direction.UP else 1
        self.selected_index = max(0, min(self.selected_index + step, len(self.entries) - 1))

    def toggle_staged(self) -> FileEntry | None:
        """Stage or unstage the entry under the cursor.

        The local flag is flipped only after the collaborator call succeeds,
        and the path's cached diffs are invalidated. The next refresh
        reconciles the flag with what git reports.

        Returns:
            The updated entry, or None if the list is empty.

        Raises:
            CollaboratorError: If staging or unstaging fails. State is unchanged.
        """
        index = self.selected_index
        if index is None:
            return None
        entry = self.entries[index]

        if entry.staged:
            self.vcs.unstage(entry.path)
        else:
            self.vcs.stage(entry.path)

        updated = entry.with_staged(not entry.staged)
        self.entries[index] = updated
        self.diff_cache.invalidate(entry.path)
        logger.debug("%s %s", "Staged" if updated.staged else "Unstaged", entry.path)
        return updated

    def can_commit(self) -> bool:
        """Whether at least one entry is staged."""
        return any(entry.staged for entry in self.entries)

    def replace_entries(self, entries: list[FileEntry] | tuple[FileEntry, ...]) -> None:
        """Replace all entries with those of a fresh snapshot.

        The cursor follows the previously selected path when it is still
        present; otherwise the old index is clamped into the new list.

        Args:
            entries: Entries of the new snapshot.
        """
        previous = self.selected
        previous_index = self.selected_index
        self.entries = list(entries)

        if not self.entries:
            self.selected_index = None
            return

        if previous is not None:
            for index, entry in enumerate(self.entries):
                if entry.path == previous.path:
                    self.selected_index = index
                    return

        index = previous_index if previous_index is not None else 0
        self.selected_index = min(index, len(self.entries) - 1)
