"""Git adapter implementing VCS protocol using subprocess git commands."""

import logging
import os
import subprocess
from pathlib import Path

from stagecraft.domain.config import GitConfig
from stagecraft.domain.entities import FileEntry, FileStatus, RepositorySnapshot
from stagecraft.domain.exceptions import CollaboratorError

logger = logging.getLogger(__name__)

# Index-side (X) status codes of `git status --porcelain`
_INDEX_STATUS_MAP: dict[str, FileStatus] = {
    "A": FileStatus.ADDED,
    "C": FileStatus.ADDED,  # Copy: treat as added
    "M": FileStatus.MODIFIED,
    "T": FileStatus.MODIFIED,  # Type change (e.g., file -> symlink)
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
}

# XY pairs git reports for unmerged paths
_UNMERGED_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})

# Codes whose record is followed by an extra NUL-terminated original path
_RENAME_CODES = frozenset({"R", "C"})

# Progress lines git prints around the actual failure reason
_NOISE_PREFIXES = ("To ", "hint:")
_REASON_PREFIXES = ("error:", "fatal:")
_REJECTED_PREFIX = "! ["


def _parse_status_code(code: str) -> tuple[FileStatus, bool] | None:
    """Parse a two-character porcelain status code.

    Args:
        code: The XY field of a porcelain v1 record (X = index, Y = worktree).

    Returns:
        Tuple of (FileStatus, staged) or None if the code is not recognized.
    """
    if len(code) != 2:
        return None

    if code == "??":
        return (FileStatus.UNTRACKED, False)

    # Conflicts are shown as unstaged modifications until resolved
    if code in _UNMERGED_CODES:
        return (FileStatus.MODIFIED, False)

    index_code, worktree_code = code[0], code[1]
    staged = index_code not in (" ", "?")

    if index_code in _INDEX_STATUS_MAP:
        return (_INDEX_STATUS_MAP[index_code], staged)

    if index_code != " ":
        return None

    if worktree_code == "D":
        return (FileStatus.DELETED, staged)
    if worktree_code in ("M", "T", "A", "R", "C"):
        return (FileStatus.MODIFIED, staged)

    return None


def _parse_porcelain(output: str) -> list[FileEntry]:
    """Parse `git status --porcelain=v1 -z` output into file entries.

    Records are NUL-terminated: "XY PATH". Renames and copies are followed by
    one more NUL-terminated field holding the original path, which is dropped
    so each entry reports the path as it is now.

    Args:
        output: Raw decoded stdout.

    Returns:
        Entries in the order git reported them.
    """
    entries: list[FileEntry] = []
    fields = output.split("\0")
    i = 0
    while i < len(fields):
        record = fields[i]
        i += 1
        if not record:
            continue

        if len(record) < 4 or record[2] != " ":
            logger.warning(f"Malformed git status record '{record}'. Skipping.")
            continue

        code, path = record[:2], record[3:]
        if code[0] in _RENAME_CODES or code[1] in _RENAME_CODES:
            i += 1  # Skip the original path

        parsed = _parse_status_code(code)
        if parsed is None:
            logger.warning(f"Unknown git status code '{code}' for path '{path}'. Skipping.")
            continue

        status, staged = parsed
        entries.append(FileEntry(path=path, status=status, staged=staged))

    return entries


def _summarize_git_output(output: str) -> str:
    """Reorder git's failure output so the reason comes first.

    "To <remote>" and "hint:" lines are dropped. The first "error:" or
    "fatal:" line leads; failing that, the first rejected-ref line; failing
    that, the last line, which is where git prints its summary (e.g.
    "nothing to commit"). The remaining lines follow in their original order.

    Args:
        output: Stripped stderr or stdout of a failed git command.

    Returns:
        Reordered output, or the input unchanged if every line was noise.
    """
    lines = [
        line.strip()
        for line in output.splitlines()
        if line.strip() and not line.strip().startswith(_NOISE_PREFIXES)
    ]
    if not lines:
        return output

    lead = next((i for i, line in enumerate(lines) if line.startswith(_REASON_PREFIXES)), None)
    if lead is None:
        lead = next(
            (i for i, line in enumerate(lines) if line.startswith(_REJECTED_PREFIX)),
            len(lines) - 1,
        )
    return "\n".join([lines[lead]] + lines[:lead] + lines[lead + 1 :])


def _parse_ahead_behind(output: str) -> tuple[int, int]:
    """Parse `git rev-list --left-right --count` output.

    Args:
        output: Raw decoded stdout, e.g. "2\\t1".

    Returns:
        Tuple of (ahead, behind); (0, 0) if the output is not two integers.
    """
    parts = output.strip().split()
    if len(parts) != 2:
        return (0, 0)
    try:
        return (int(parts[0]), int(parts[1]))
    except ValueError:
        return (0, 0)


class GitAdapter:
    """Git VCS adapter using subprocess calls to git CLI."""

    def __init__(self, path: Path, config: GitConfig | None = None) -> None:
        """Initialize Git adapter.

        Args:
            path: Any directory inside a git work tree.
            config: Git collaborator configuration. Default: GitConfig().

        Raises:
            RuntimeError: If path is not inside a git work tree.
        """
        self.config = config or GitConfig()
        self.repo_root = self._resolve_toplevel(path.resolve())

    def _resolve_toplevel(self, path: Path) -> Path:
        """Find the work tree root containing path."""
        try:
            result = subprocess.run(
                [self.config.executable, "-C", str(path), "rev-parse", "--show-toplevel"],
                capture_output=True,
                check=True,
                timeout=self.config.timeout,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise RuntimeError(f"Not a git repository: {path}") from e

        toplevel = result.stdout.decode("utf-8", errors="replace").strip()
        if not toplevel:
            # Inside .git or a bare repository: there is no work tree to operate on
            raise RuntimeError(f"Not a git repository: {path}")
        return Path(toplevel)

    def _run_git(
        self,
        args: list[str],
        check: bool = True,
    ) -> subprocess.CompletedProcess[bytes]:
        """Run a git command in the repository.

        Args:
            args: Git command arguments (without 'git' prefix).
            check: Whether to raise CalledProcessError on non-zero exit.

        Returns:
            CompletedProcess with command results.

        Raises:
            subprocess.CalledProcessError: If check=True and command fails.
            subprocess.TimeoutExpired: If the command exceeds the configured timeout.
            OSError: If the git executable cannot be started.
        """
        cmd = [self.config.executable, "-C", str(self.repo_root)] + args
        # Never let git block on a credential prompt behind the full-screen UI
        env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
        logger.debug("Running %s", " ".join(cmd))
        return subprocess.run(
            cmd,
            capture_output=True,
            stdin=subprocess.DEVNULL,
            check=check,
            timeout=self.config.timeout,
            env=env,
        )

    def _format_git_error(
        self,
        error: subprocess.CalledProcessError,
        context: str,
    ) -> str:
        """Format git error output for display.

        Args:
            error: The CalledProcessError from git command.
            context: Human-readable description of what was being done.

        Returns:
            git's stderr (or stdout when stderr is empty) with the failure reason
            on the first line, or a message with the exit code when git printed
            nothing.
        """
        stderr = error.stderr.decode("utf-8", errors="replace").strip() if error.stderr else ""
        stdout = error.stdout.decode("utf-8", errors="replace").strip() if error.stdout else ""

        output = stderr or stdout
        if output:
            return _summarize_git_output(output)
        return f"{context} (git exit code {error.returncode}, no error output from git)"

    def _call(
        self,
        operation: str,
        args: list[str],
        context: str,
        ok_returncodes: tuple[int, ...] = (0,),
    ) -> str:
        """Run git and convert every failure into CollaboratorError.

        Args:
            operation: Collaborator operation name reported in errors.
            args: Git command arguments.
            context: Human-readable description for error messages.
            ok_returncodes: Exit codes that count as success.

        Returns:
            Decoded stdout.

        Raises:
            CollaboratorError: On non-zero exit, timeout, or missing executable.
        """
        try:
            result = self._run_git(args)
        except subprocess.CalledProcessError as e:
            if e.returncode in ok_returncodes:
                return e.stdout.decode("utf-8", errors="replace") if e.stdout else ""
            raise CollaboratorError(operation, self._format_git_error(e, context)) from e
        except subprocess.TimeoutExpired as e:
            raise CollaboratorError(
                operation, f"{context} timed out after {self.config.timeout:g}s"
            ) from e
        except OSError as e:
            raise CollaboratorError(
                operation,
                f"{context}: cannot run '{self.config.executable}': {e}",
                hint="Check that git is installed and on PATH",
            ) from e

        return result.stdout.decode("utf-8", errors="replace")

    def _current_branch(self) -> str:
        output = self._call("status", ["branch", "--show-current"], "Failed to read branch")
        return output.strip() or "HEAD"

    def _ahead_behind(self) -> tuple[int, int]:
        """Count commits ahead of and behind the upstream.

        No upstream and unborn branches are ordinary states, not errors.
        """
        try:
            output = self._call(
                "status",
                ["rev-list", "--left-right", "--count", "HEAD...@{u}"],
                "Failed to count commits against upstream",
            )
        except CollaboratorError as e:
            logger.debug("No ahead/behind information: %s", e.detail)
            return (0, 0)
        return _parse_ahead_behind(output)

    def get_status(self) -> RepositorySnapshot:
        """Get branch state and the list of changed files.

        Returns:
            Fresh snapshot of the working tree.

        Raises:
            CollaboratorError: If the status cannot be read.
        """
        output = self._call(
            "status",
            ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
            "Failed to read working tree status",
        )
        entries = _parse_porcelain(output)
        branch = self._current_branch()
        ahead, behind = self._ahead_behind()

        return RepositorySnapshot(
            branch=branch,
            ahead=ahead,
            behind=behind,
            entries=tuple(entries),
        )

    def stage(self, path: str) -> None:
        """Add the current change of a path to the staging area.

        Uses `add -A` so deletions are staged as well.
        """
        self._call("stage", ["add", "-A", "--", path], f"Failed to stage '{path}'")

    def unstage(self, path: str) -> None:
        """Remove a path's change from the staging area.

        `reset` with a pathspec also works on a branch with no commits yet.
        """
        self._call("unstage", ["reset", "-q", "--", path], f"Failed to unstage '{path}'")

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
        context = f"Failed to diff '{path}'"
        args = ["diff", "--no-color"]
        if staged:
            args.append("--cached")
        output = self._call("diff", args + ["--", path], context)

        if output or staged or self._is_tracked(path):
            return output

        # Untracked files have no index entry to diff against
        return self._call(
            "diff",
            ["diff", "--no-color", "--no-index", "--", os.devnull, path],
            context,
            ok_returncodes=(0, 1),
        )

    def _is_tracked(self, path: str) -> bool:
        try:
            self._call(
                "diff",
                ["ls-files", "--error-unmatch", "--", path],
                f"Failed to check whether '{path}' is tracked",
            )
        except CollaboratorError:
            return False
        return True

    def commit(self, message: str) -> None:
        """Commit the staged changes with the given message."""
        self._call("commit", ["commit", "-m", message], "Failed to commit")
        logger.info("Committed: %s", message.splitlines()[0] if message else "")

    def push(self) -> None:
        """Push the current branch to its configured upstream."""
        self._call("push", ["push"], "Failed to push")
        logger.info("Pushed %s", self.repo_root)
