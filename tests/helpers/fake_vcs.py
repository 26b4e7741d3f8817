"""In-memory VCS double for session tests.

Behaves like a tiny git: staging flips the stored entry, committing drops the
staged entries and bumps `ahead`, pushing resets `ahead`. Any operation can be
made to fail by putting its name in `failures`.
"""

from dataclasses import dataclass, field

from stagecraft.domain.entities import FileEntry, FileStatus, RepositorySnapshot
from stagecraft.domain.exceptions import CollaboratorError


@dataclass
class FakeVCS:
    branch: str = "main"
    ahead: int = 0
    behind: int = 0
    entries: list[FileEntry] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)
    diffs: dict[tuple[str, bool], str] = field(default_factory=dict)
    calls: list[tuple] = field(default_factory=list)
    commits: list[str] = field(default_factory=list)

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.failures:
            raise CollaboratorError(operation, self.failures[operation])

    def _set_staged(self, path: str, staged: bool) -> None:
        self.entries = [
            entry.with_staged(staged) if entry.path == path else entry
            for entry in self.entries
        ]

    def get_status(self) -> RepositorySnapshot:
        self.calls.append(("get_status",))
        self._maybe_fail("status")
        return RepositorySnapshot(
            branch=self.branch,
            ahead=self.ahead,
            behind=self.behind,
            entries=tuple(self.entries),
        )

    def stage(self, path: str) -> None:
        self.calls.append(("stage", path))
        self._maybe_fail("stage")
        self._set_staged(path, True)

    def unstage(self, path: str) -> None:
        self.calls.append(("unstage", path))
        self._maybe_fail("unstage")
        self._set_staged(path, False)

    def diff(self, path: str, staged: bool) -> str:
        self.calls.append(("diff", path, staged))
        self._maybe_fail("diff")
        default = f"--- a/{path}\n+++ b/{path}\n@@ -1 +1 @@\n-old\n+new\n"
        return self.diffs.get((path, staged), default)

    def commit(self, message: str) -> None:
        self.calls.append(("commit", message))
        self._maybe_fail("commit")
        self.commits.append(message)
        self.entries = [entry for entry in self.entries if not entry.staged]
        self.ahead += 1

    def push(self) -> None:
        self.calls.append(("push",))
        self._maybe_fail("push")
        self.ahead = 0

    def count(self, operation: str) -> int:
        """Number of recorded calls of one operation."""
        return sum(1 for call in self.calls if call[0] == operation)


def entry(path: str, status: FileStatus = FileStatus.MODIFIED, staged: bool = False) -> FileEntry:
    """Shorthand FileEntry constructor for tests."""
    return FileEntry(path=path, status=status, staged=staged)
