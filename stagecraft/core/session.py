"""Interactive session controller.

Owns the current mode and routes every input event to the component the mode
allows: the file list, the diff cache, or the commit composer. Collaborator
calls are made one at a time; while one is outstanding the controller ignores
input.
"""

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from stagecraft.core.commit_composer import CommitComposer
from stagecraft.core.diff_cache import DiffCache
from stagecraft.core.file_list import FileListModel
from stagecraft.core.keys import Action, KeySymbol, translate_key
from stagecraft.core.use_case_errors import format_error_message, log_use_case_error
from stagecraft.core.view import (
    ComposerView,
    EntryView,
    SessionView,
    StatusLevel,
    StatusMessage,
)
from stagecraft.domain.config import StagecraftConfig
from stagecraft.domain.entities import Direction, Mode, RepositorySnapshot
from stagecraft.domain.exceptions import (
    CollaboratorError,
    CommitValidationError,
    StagecraftDomainError,
)
from stagecraft.ports.vcs import VCS

logger = logging.getLogger(__name__)

STAGED_MARKER = "●"
UNSTAGED_MARKER = "○"

# Lines moved by PageUp/PageDown in the diff view
DIFF_PAGE_SIZE = 20


class SessionController:
    """Modal state machine for one interactive session.

    Attributes:
        mode: Active mode.
        snapshot: Last snapshot successfully read, or None before the first.
        file_list: File entries and selection cursor.
        diff_cache: Cached diffs for the diff view.
        composer: Commit message buffer (CommitCompose only).
        busy: True while a collaborator call is running.
        should_quit: Set once the operator quits; the session accepts no
            further input.
    """

    def __init__(
        self,
        vcs: VCS,
        config: StagecraftConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize a session in FileList mode with no snapshot.

        Args:
            vcs: Version-control collaborator.
            config: Session configuration. Default: StagecraftConfig.default().
            clock: Monotonic clock used to expire status messages.
        """
        self.vcs = vcs
        self.config = config or StagecraftConfig.default()
        self._clock = clock

        self.mode = Mode.FILE_LIST
        self.snapshot: RepositorySnapshot | None = None
        self.diff_cache = DiffCache(vcs)
        self.file_list = FileListModel(vcs, self.diff_cache)
        self.composer: CommitComposer | None = None

        self.diff_path: str | None = None
        self.diff_text = ""
        self.diff_is_error = False
        self.diff_scroll = 0

        self.status: StatusMessage | None = None
        self.busy = False
        self.should_quit = False

        self._handlers: dict[Mode, Callable[[Action, str | None], None]] = {
            Mode.FILE_LIST: self._handle_file_list,
            Mode.DIFF_VIEW: self._handle_diff_view,
            Mode.COMMIT_COMPOSE: self._handle_commit_compose,
            Mode.HELP: self._handle_help,
        }

    # === Input dispatch ===

    def handle_key(self, key: KeySymbol) -> None:
        """Handle one decoded key press.

        Keys that mean nothing in the active mode are ignored.

        Args:
            key: Named Key or a single printable character.
        """
        translated = translate_key(self.mode, key)
        if translated is None:
            logger.debug("Key %r has no binding in %s", key, self.mode.label)
            return
        action, text = translated
        self.dispatch(action, text)

    def dispatch(self, action: Action, text: str | None = None) -> None:
        """Apply one action to the active mode.

        Actions not legal in the active mode are no-ops. Nothing is
        dispatched while a collaborator call is outstanding or after quit.

        Args:
            action: Action to apply.
            text: Text to insert, for Action.INSERT_TEXT.
        """
        if self.busy:
            logger.debug("Ignoring %s while a git call is in progress", action.value)
            return
        if self.should_quit:
            return
        self._handlers[self.mode](action, text)

    def _handle_file_list(self, action: Action, text: str | None) -> None:
        if action == Action.MOVE_UP:
            self.file_list.move_cursor(Direction.UP)
        elif action == Action.MOVE_DOWN:
            self.file_list.move_cursor(Direction.DOWN)
        elif action == Action.SELECT_DIFF:
            self.open_diff()
        elif action == Action.TOGGLE_STAGE:
            self.toggle_staged()
        elif action == Action.START_COMMIT:
            self.start_commit()
        elif action == Action.PUSH:
            self.push()
        elif action == Action.REFRESH:
            self.refresh()
        elif action == Action.HELP:
            self.mode = Mode.HELP
        elif action == Action.QUIT:
            logger.debug("Quit requested")
            self.should_quit = True

    def _handle_diff_view(self, action: Action, text: str | None) -> None:
        if action == Action.BACK:
            self.close_diff()
        elif action == Action.SCROLL_UP:
            self._scroll_diff(-1)
        elif action == Action.SCROLL_DOWN:
            self._scroll_diff(1)
        elif action == Action.PAGE_UP:
            self._scroll_diff(-DIFF_PAGE_SIZE)
        elif action == Action.PAGE_DOWN:
            self._scroll_diff(DIFF_PAGE_SIZE)

    def _handle_commit_compose(self, action: Action, text: str | None) -> None:
        composer = self.composer
        if composer is None:
            return

        if action == Action.INSERT_TEXT and text:
            composer.insert_char(text)
        elif action == Action.NEWLINE:
            composer.insert_newline()
        elif action == Action.DELETE_BACKWARD:
            composer.delete_backward()
        elif action == Action.DELETE_FORWARD:
            composer.delete_forward()
        elif action == Action.CURSOR_LEFT:
            composer.move_cursor(-1)
        elif action == Action.CURSOR_RIGHT:
            composer.move_cursor(1)
        elif action == Action.CURSOR_HOME:
            composer.jump_home()
        elif action == Action.CURSOR_END:
            composer.jump_end()
        elif action == Action.CYCLE_PREFIX:
            composer.cycle_prefix()
        elif action == Action.CONFIRM:
            self.commit()
        elif action == Action.CANCEL:
            self.cancel_commit()

    def _handle_help(self, action: Action, text: str | None) -> None:
        if action == Action.DISMISS:
            self.mode = Mode.FILE_LIST

    # === Collaborator calls ===

    @contextmanager
    def _collaborator_call(self) -> Iterator[None]:
        """Mark the session busy for the duration of one collaborator call."""
        self.busy = True
        try:
            yield
        finally:
            self.busy = False

    def refresh(self) -> bool:
        """Replace the snapshot with a fresh one from the collaborator.

        The diff cache is cleared either way. On failure the previous
        snapshot and file list stay on screen.

        Returns:
            True if a new snapshot was loaded.
        """
        self.diff_cache.clear()
        try:
            with self._collaborator_call():
                snapshot = self.vcs.get_status()
        except CollaboratorError as e:
            self._report_error(e, "refresh")
            return False

        self.snapshot = snapshot
        self.file_list.replace_entries(snapshot.entries)
        logger.debug(
            "Refreshed %s: %d changed files, ahead %d, behind %d",
            snapshot.branch,
            len(snapshot.entries),
            snapshot.ahead,
            snapshot.behind,
        )
        return True

    def toggle_staged(self) -> None:
        """Stage or unstage the selected entry."""
        if not self.file_list.entries:
            return
        try:
            with self._collaborator_call():
                self.file_list.toggle_staged()
        except CollaboratorError as e:
            self._report_error(e, "toggle")
            return
        self.diff_cache.clear()

    def open_diff(self) -> None:
        """Show the diff of the selected entry.

        A failed diff still enters the diff view, showing the error instead.
        """
        entry = self.file_list.selected
        if entry is None:
            return

        try:
            with self._collaborator_call():
                self.diff_text = self.diff_cache.get_diff(entry.path, entry.staged)
            self.diff_is_error = False
        except CollaboratorError as e:
            log_use_case_error(e)
            self.diff_text = format_error_message(e)
            self.diff_is_error = True

        self.diff_path = entry.path
        self.diff_scroll = 0
        self.mode = Mode.DIFF_VIEW

    def close_diff(self) -> None:
        """Leave the diff view."""
        self.diff_path = None
        self.diff_text = ""
        self.diff_is_error = False
        self.diff_scroll = 0
        self.mode = Mode.FILE_LIST

    def _scroll_diff(self, delta: int) -> None:
        last_line = max(0, len(self.diff_text.splitlines()) - 1)
        self.diff_scroll = max(0, min(self.diff_scroll + delta, last_line))

    def start_commit(self) -> None:
        """Open the commit composer if anything is staged."""
        if not self.file_list.can_commit():
            self._set_status("No staged files to commit", "info")
            return
        self.composer = CommitComposer(first_line_limit=self.config.display.first_line_limit)
        self.mode = Mode.COMMIT_COMPOSE

    def cancel_commit(self) -> None:
        """Discard the composer and return to the file list."""
        self.composer = None
        self.mode = Mode.FILE_LIST

    def commit(self) -> None:
        """Commit the staged entries with the composed message.

        On success the composer is discarded, the snapshot refreshed, and the
        session returns to the file list. On any failure the session stays in
        the composer with the typed text intact.
        """
        composer = self.composer
        if composer is None:
            return

        try:
            with self._collaborator_call():
                message = composer.commit(self.vcs)
        except CommitValidationError as e:
            self._set_status(e.message, "error", "commit")
            return
        except CollaboratorError as e:
            self._report_error(e, "commit")
            return

        self.composer = None
        self.mode = Mode.FILE_LIST
        self._set_status(f"Committed: {message.splitlines()[0]}", "success", "commit")
        self.refresh()

    def push(self) -> None:
        """Push the current branch to its upstream, refreshing on success."""
        try:
            with self._collaborator_call():
                self.vcs.push()
        except CollaboratorError as e:
            self._report_error(e, "push")
            return

        branch = self.snapshot.branch if self.snapshot else "branch"
        self._set_status(f"Pushed {branch}", "success", "push")
        self.refresh()

    # === Status messages ===

    def _set_status(
        self,
        text: str,
        level: StatusLevel = "info",
        operation: str | None = None,
    ) -> None:
        self.status = StatusMessage(
            text=text,
            level=level,
            operation=operation,
            created_at=self._clock(),
        )

    def _report_error(self, error: StagecraftDomainError, operation: str) -> None:
        log_use_case_error(error)
        self._set_status(format_error_message(error), "error", operation)

    def current_status(self) -> StatusMessage | None:
        """Status message if it has not expired yet."""
        if self.status is None:
            return None
        age = self._clock() - self.status.created_at
        if age > self.config.display.notification_seconds:
            return None
        return self.status

    # === Rendering ===

    def view(self) -> SessionView:
        """Build a read-only view of the current state."""
        snapshot = self.snapshot
        entries = tuple(
            EntryView(
                path=entry.path,
                glyph=entry.status.glyph,
                staged_marker=STAGED_MARKER if entry.staged else UNSTAGED_MARKER,
                staged=entry.staged,
            )
            for entry in self.file_list.entries
        )

        composer_view = None
        if self.mode == Mode.COMMIT_COMPOSE and self.composer is not None:
            composer = self.composer
            composer_view = ComposerView(
                prefix=composer.prefix,
                body=composer.body,
                cursor_pos=composer.cursor_pos,
                message=composer.compose_message(),
                is_valid=composer.is_valid,
                first_line_length=composer.first_line_length,
                first_line_limit=composer.first_line_limit,
                first_line_warning=composer.first_line_warning,
            )

        in_diff = self.mode == Mode.DIFF_VIEW
        return SessionView(
            mode=self.mode,
            branch=snapshot.branch if snapshot else "",
            ahead=snapshot.ahead if snapshot else 0,
            behind=snapshot.behind if snapshot else 0,
            entries=entries,
            cursor_index=self.file_list.selected_index,
            diff_path=self.diff_path if in_diff else None,
            diff_text=self.diff_text if in_diff else "",
            diff_is_error=self.diff_is_error if in_diff else False,
            diff_scroll=self.diff_scroll if in_diff else 0,
            composer=composer_view,
            status=self.current_status(),
            busy=self.busy,
        )
