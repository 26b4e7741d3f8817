"""Read-only view of a session, sufficient to render one frame."""

from dataclasses import dataclass, field
from typing import Literal

from stagecraft.domain.entities import Mode

StatusLevel = Literal["info", "success", "error"]


@dataclass(frozen=True)
class StatusMessage:
    """Transient message shown to the operator.

    Attributes:
        text: Message text (for collaborator errors, the collaborator's detail).
        level: Severity used for styling.
        operation: Operation that produced the message, if any.
        created_at: Clock reading when the message was set.
    """

    text: str
    level: StatusLevel = "info"
    operation: str | None = None
    created_at: float = 0.0


@dataclass(frozen=True)
class EntryView:
    path: str
    glyph: str
    staged_marker: str
    staged: bool


@dataclass(frozen=True)
class ComposerView:
    prefix: str | None
    body: str
    cursor_pos: int
    message: str
    is_valid: bool
    first_line_length: int
    first_line_limit: int
    first_line_warning: bool


@dataclass(frozen=True)
class SessionView:
    """Everything a renderer needs after a state change.

    Attributes:
        mode: Active mode.
        branch: Branch of the last snapshot ("" before the first one).
        ahead: Commits ahead of upstream.
        behind: Commits behind upstream.
        entries: File list rows.
        cursor_index: Selected row, None when the list is empty.
        diff_path: Path whose diff is shown (DiffView only).
        diff_text: Diff text, or the error text when diff_is_error.
        diff_is_error: Whether diff_text is an error message.
        diff_scroll: First diff line to show.
        composer: Commit composer state (CommitCompose only).
        status: Current, unexpired status message.
        busy: Whether a collaborator call is in progress.
    """

    mode: Mode
    branch: str = ""
    ahead: int = 0
    behind: int = 0
    entries: tuple[EntryView, ...] = field(default_factory=tuple)
    cursor_index: int | None = None
    diff_path: str | None = None
    diff_text: str = ""
    diff_is_error: bool = False
    diff_scroll: int = 0
    composer: ComposerView | None = None
    status: StatusMessage | None = None
    busy: bool = False

    @property
    def entry_count(self) -> int:
        """Number of changed files."""
        return len(self.entries)
