"""CLI error handling with actionable hints.

Provides consistent error formatting and common error factory functions
for the stagecraft command.
"""

from pathlib import Path
from typing import NoReturn

import click


class StagecraftCliError(click.ClickException):
    """CLI error with actionable hint for users.

    Attributes:
        message: The primary error message.
        hint: Optional actionable suggestion for the user.

    Example:
        raise StagecraftCliError(
            "Not a git repository",
            hint="Run stagecraft from inside a git work tree, or pass --repo",
        )
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize the error with message and optional hint.

        Args:
            message: The primary error message.
            hint: Optional actionable suggestion for the user.
        """
        super().__init__(message)
        self.hint = hint

    def format_message(self) -> str:
        """Format the error message with hint if present.

        Returns:
            Formatted error message, with hint on a new line if provided.
        """
        msg = self.message
        if self.hint:
            msg += f"\nHint: {self.hint}"
        return msg


def repo_not_found_error(path: Path) -> NoReturn:
    """Raise error when the start directory is not inside a git work tree.

    Args:
        path: Directory stagecraft was started in.

    Raises:
        StagecraftCliError: Always raises with a hint.
    """
    raise StagecraftCliError(
        f"Not a git repository: {path}",
        hint="Run stagecraft from inside a git work tree, or pass --repo PATH",
    )
