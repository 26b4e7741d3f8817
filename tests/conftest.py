"""Pytest configuration and shared fixtures."""

import shutil
import subprocess
from pathlib import Path

import pytest

from stagecraft.core.session import SessionController
from stagecraft.domain.config import StagecraftConfig
from stagecraft.domain.entities import FileStatus
from tests.helpers.fake_vcs import FakeVCS, entry

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

# ============================================================================
# Git Repository Helpers
# ============================================================================
# These helpers consolidate git setup code to avoid duplication across tests.
# Use these functions in fixtures to create consistent test repositories.


def run_git(path: Path, *args: str) -> str:
    """Run a git command in path and return its stdout.

    Raises:
        subprocess.CalledProcessError: If the command fails.
    """
    result = subprocess.run(
        ["git", *args],
        cwd=path,
        check=True,
        capture_output=True,
        timeout=10,
    )
    return result.stdout.decode("utf-8", errors="replace")


def init_git_repo(
    path: Path,
    user_name: str = "Test User",
    user_email: str = "test@example.com",
) -> None:
    """Initialize a git repository with user configuration.

    This is the single source of truth for git repository initialization.
    Use this helper in fixtures instead of inline subprocess calls.

    Args:
        path: Directory to initialize as a git repository.
        user_name: Git user.name configuration value.
        user_email: Git user.email configuration value.
    """
    run_git(path, "init", "-b", "main")
    run_git(path, "config", "user.name", user_name)
    run_git(path, "config", "user.email", user_email)
    run_git(path, "config", "commit.gpgsign", "false")


def git_add_and_commit(
    path: Path,
    message: str = "Initial commit",
    add_all: bool = True,
) -> None:
    """Stage files and create a git commit.

    Args:
        path: Git repository root directory.
        message: Commit message.
        add_all: If True, stages all files with 'git add .'.
    """
    if add_all:
        run_git(path, "add", ".")
    run_git(path, "commit", "-m", message)


def create_test_files(path: Path, files: dict[str, str]) -> None:
    """Create multiple files in a directory.

    Args:
        path: Base directory for file creation.
        files: Mapping of relative file paths to file contents.
               Parent directories are created automatically.
    """
    for rel_path, content in files.items():
        file_path = path / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a git repository with one commit of two files.

    Returns:
        Path to the git repository root.
    """
    repo = tmp_path / "test_repo"
    repo.mkdir()
    init_git_repo(repo)
    create_test_files(
        repo,
        {
            "README.md": "# Project\n",
            "src/app.py": "def main():\n    return 1\n",
        },
    )
    git_add_and_commit(repo)
    return repo


@pytest.fixture
def remote_repo(tmp_path: Path, git_repo: Path) -> Path:
    """Attach a bare remote to git_repo with main tracking origin/main.

    Returns:
        Path to the bare remote.
    """
    remote = tmp_path / "remote.git"
    run_git(tmp_path, "init", "--bare", "-b", "main", str(remote))
    run_git(git_repo, "remote", "add", "origin", str(remote))
    run_git(git_repo, "push", "-u", "origin", "main")
    return remote


@pytest.fixture
def diverged_remote(tmp_path: Path, git_repo: Path, remote_repo: Path) -> Path:
    """Give remote_repo a commit git_repo lacks, and git_repo one the remote lacks.

    Returns:
        Path to the bare remote.
    """
    other = tmp_path / "other_clone"
    run_git(tmp_path, "clone", str(remote_repo), str(other))
    run_git(other, "config", "user.name", "Other User")
    run_git(other, "config", "user.email", "other@example.com")
    run_git(other, "config", "commit.gpgsign", "false")
    create_test_files(other, {"theirs.txt": "theirs\n"})
    git_add_and_commit(other, "Remote commit")
    run_git(other, "push")

    create_test_files(git_repo, {"ours.txt": "ours\n"})
    git_add_and_commit(git_repo, "Local commit")
    return remote_repo


# ============================================================================
# Session Fixtures
# ============================================================================


@pytest.fixture
def fake_vcs() -> FakeVCS:
    """A fake collaborator with two changed files, one of them staged."""
    return FakeVCS(
        entries=[
            entry("a.txt", FileStatus.MODIFIED, staged=False),
            entry("b.txt", FileStatus.ADDED, staged=True),
        ]
    )


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(fake_vcs: FakeVCS, clock: FakeClock) -> SessionController:
    """A session over fake_vcs with its first snapshot loaded."""
    controller = SessionController(fake_vcs, StagecraftConfig.default(), clock=clock)
    controller.refresh()
    return controller
