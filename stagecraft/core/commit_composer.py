"""Commit message composer.

Manages the state of the commit message being typed: an optional
conventional-commit prefix, the message body, and a cursor within the body.
"""

from dataclasses import dataclass

from stagecraft.domain.entities import COMMIT_PREFIXES
from stagecraft.domain.exceptions import CommitValidationError
from stagecraft.ports.vcs import VCS


@dataclass
class CommitComposer:
    """Editable commit message buffer.

    Attributes:
        prefix: Active prefix from COMMIT_PREFIXES, or None.
        body: Message text typed by the operator (may span several lines).
        cursor_pos: Insertion point, always within [0, len(body)].
        first_line_limit: Advisory subject length; exceeding it only warns.
    """

    prefix: str | None = None
    body: str = ""
    cursor_pos: int = 0
    first_line_limit: int = 50

    def cycle_prefix(self) -> None:
        """Advance the prefix: none -> feat -> fix -> ... -> chore -> none."""
        if self.prefix is None:
            self.prefix = COMMIT_PREFIXES[0]
            return

        index = COMMIT_PREFIXES.index(self.prefix) + 1
        self.prefix = COMMIT_PREFIXES[index] if index < len(COMMIT_PREFIXES) else None

    def insert_char(self, char: str) -> None:
        """Insert text at the cursor and move the cursor past it.

        Args:
            char: Character (or string) to insert.
        """
        self._clamp()
        self.body = self.body[: self.cursor_pos] + char + self.body[self.cursor_pos :]
        self.cursor_pos += len(char)

    def insert_newline(self) -> None:
        """Start a new line at the cursor."""
        self.insert_char("\n")

    def delete_backward(self) -> None:
        """Delete the character before the cursor (Backspace)."""
        self._clamp()
        if self.cursor_pos == 0:
            return
        self.body = self.body[: self.cursor_pos - 1] + self.body[self.cursor_pos :]
        self.cursor_pos -= 1

    def delete_forward(self) -> None:
        """Delete the character under the cursor (Delete)."""
        self._clamp()
        if self.cursor_pos >= len(self.body):
            return
        self.body = self.body[: self.cursor_pos] + self.body[self.cursor_pos + 1 :]

    def move_cursor(self, delta: int) -> None:
        """Move the cursor by delta characters, clamped to the body.

        Args:
            delta: Negative moves left, positive moves right.
        """
        self.cursor_pos += delta
        self._clamp()

    def jump_home(self) -> None:
        """Move the cursor to the start of the body."""
        self.cursor_pos = 0

    def jump_end(self) -> None:
        """Move the cursor to the end of the body."""
        self.cursor_pos = len(self.body)

    def _clamp(self) -> None:
        self.cursor_pos = max(0, min(self.cursor_pos, len(self.body)))

    @property
    def first_line_length(self) -> int:
        """Length of the body up to the first line break."""
        return len(self.body.split("\n", 1)[0])

    @property
    def first_line_warning(self) -> bool:
        """Whether the subject line is longer than the advisory limit."""
        return self.first_line_length > self.first_line_limit

    @property
    def is_valid(self) -> bool:
        """Whether the message can be committed (body not blank)."""
        return bool(self.body.strip())

    def compose_message(self) -> str:
        """Build the full commit message.

        Returns:
            "prefix: body" when a prefix is set, otherwise the body.
        """
        if self.prefix:
            return f"{self.prefix}: {self.body}"
        return self.body

    def commit(self, vcs: VCS) -> str:
        """Commit the staged changes with the composed message.

        Args:
            vcs: Collaborator to commit through.

        Returns:
            The message that was committed.

        Raises:
            CommitValidationError: If the body is empty or whitespace only.
                Nothing is sent to the collaborator.
            CollaboratorError: If the collaborator rejects the commit. The
                buffer is left untouched.
        """
        if not self.is_valid:
            raise CommitValidationError(
                "Commit message cannot be empty",
                hint="Type a message, or press Tab to pick a prefix first",
            )

        message = self.compose_message()
        vcs.commit(message)
        return message
