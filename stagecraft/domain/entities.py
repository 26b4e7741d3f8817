"""Domain entities and value objects.

Core domain models for a stagecraft session: the repository snapshot returned
by the version-control collaborator, its file entries, and the small enums the
session state machine is built on. These are pure Python dataclasses with no
dependencies on infrastructure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FileStatus(str, Enum):
    """Change classification of a file in the working tree.

    Each status carries a single-character glyph used by the file list.
    """

    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"
    UNTRACKED = "untracked"

    @property
    def glyph(self) -> str:
        """One-character marker shown next to the path."""
        return _STATUS_GLYPHS[self]


_STATUS_GLYPHS: dict[FileStatus, str] = {
    FileStatus.MODIFIED: "M",
    FileStatus.ADDED: "A",
    FileStatus.DELETED: "D",
    FileStatus.RENAMED: "R",
    FileStatus.UNTRACKED: "?",
}


class Mode(str, Enum):
    """View mode of an interactive session."""

    FILE_LIST = "file_list"
    DIFF_VIEW = "diff_view"
    COMMIT_COMPOSE = "commit_compose"
    HELP = "help"

    @property
    def label(self) -> str:
        """Upper-case label for the status bar (e.g. "FILE LIST")."""
        return self.value.replace("_", " ").upper()


class Direction(str, Enum):
    """Cursor movement direction in the file list."""

    UP = "up"
    DOWN = "down"


# Conventional commit prefixes, in cycling order.
COMMIT_PREFIXES: tuple[str, ...] = (
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
)


@dataclass(frozen=True)
class FileEntry:
    """A changed path and its staging state.

    Attributes:
        path: Path relative to the repository root, unique within a snapshot.
        status: Change classification.
        staged: Whether the change is in the staging area. Flipped locally
            after a successful stage/unstage and reconciled on refresh.
    """

    path: str
    status: FileStatus
    staged: bool = False

    def with_staged(self, staged: bool) -> FileEntry:
        """Return a copy of this entry with a different staged flag."""
        return FileEntry(path=self.path, status=self.status, staged=staged)


@dataclass(frozen=True)
class RepositorySnapshot:
    """Branch state and changed files as reported by the collaborator.

    A snapshot is never patched: every refresh builds a new one that fully
    replaces the previous.

    Attributes:
        branch: Current branch name ("HEAD" when detached).
        ahead: Commits the local branch has that its upstream lacks.
        behind: Commits the upstream has that the local branch lacks.
        entries: Changed files, in the order the collaborator reported them.

    Raises:
        ValueError: If ahead or behind is negative.
    """

    branch: str
    ahead: int = 0
    behind: int = 0
    entries: tuple[FileEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        """Validate counts after initialization."""
        if self.ahead < 0:
            raise ValueError(f"ahead cannot be negative, got {self.ahead}")
        if self.behind < 0:
            raise ValueError(f"behind cannot be negative, got {self.behind}")
