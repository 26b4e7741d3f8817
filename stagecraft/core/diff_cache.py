"""Diff cache for the diff view.

Diffs are fetched from the collaborator on demand and kept until the staging
area or the snapshot changes.
"""

import logging

from stagecraft.ports.vcs import VCS

logger = logging.getLogger(__name__)


class DiffCache:
    """Caches diff text keyed by (path, staged)."""

    def __init__(self, vcs: VCS) -> None:
        self.vcs = vcs
        self._entries: dict[tuple[str, bool], str] = {}

    def get_diff(self, path: str, staged: bool) -> str:
        """Return the diff for a path, fetching it if not cached.

        Args:
            path: Path relative to repository root.
            staged: Whether the path is staged (staged diff vs working-tree diff).

        Returns:
            Diff text.

        Raises:
            CollaboratorError: If the collaborator cannot produce the diff.
                Failures are not cached.
        """
        key = (path, staged)
        if key in self._entries:
            return self._entries[key]

        text = self.vcs.diff(path, staged)
        self._entries[key] = text
        return text

    def invalidate(self, path: str) -> None:
        """Drop the cached staged and unstaged diffs of one path."""
        self._entries.pop((path, True), None)
        self._entries.pop((path, False), None)

    def clear(self) -> None:
        """Drop every cached diff."""
        if self._entries:
            logger.debug("Clearing %d cached diffs", len(self._entries))
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
