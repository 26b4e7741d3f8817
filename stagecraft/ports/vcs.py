"""Version Control System (VCS) port interface.

Defines the abstract interface the interactive session uses to talk to the
version-control collaborator. Every method is a single synchronous call.
"""

from typing import Protocol

from stagecraft.domain.entities import RepositorySnapshot


class VCS(Protocol):
    """Protocol for version control system operations (Git)."""

    def get_status(self) -> RepositorySnapshot:
        """Get branch state and the list of changed files.

        Returns:
            Fresh snapshot of the working tree.

        Raises:
            CollaboratorError: If the status cannot be read.
        """
        ...

    def stage(self, path: str) -> None:
        """Add the current change of a path to the staging area.

        Args:
            path: Path relative to repository root.

        Raises:
            CollaboratorError: If staging fails.
        """
        ...

    def unstage(self, path: str) -> None:
        """Remove a path's change from the staging area.

        Args:
            path: Path relative to repository root.

        Raises:
            CollaboratorError: If unstaging fails.
        """
        ...

    def diff(self, path: str, staged: bool) -> str:
        """Get diff text for a path.

        Args:
            path: Path relative to repository root.
            staged: True for the staged diff, False for the working-tree diff.

        Returns:
            Unified diff text (may be empty).

        Raises:
            CollaboratorError: If the diff cannot be produced.
        """
        ...

    def commit(self, message: str) -> None:
        """Commit the staged changes.

        Args:
            message: Full commit message.

        Raises:
            CollaboratorError: If the commit fails (nothing staged, no identity, hooks).
        """
        ...

    def push(self) -> None:
        """Push the current branch to its configured upstream.

        Raises:
            CollaboratorError: If there is no upstream, the remote rejects the
                push, or the network fails.
        """
        ...
