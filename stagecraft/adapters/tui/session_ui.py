"""Full-screen terminal UI for an interactive stagecraft session.

Decodes prompt_toolkit key presses into abstract key symbols, feeds them to
the SessionController, and renders its SessionView.
"""

import asyncio
import logging
from typing import Any

from prompt_toolkit import Application
from prompt_toolkit.data_structures import Point
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Dimension, HSplit, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.layout import Layout
from prompt_toolkit.output import Output
from prompt_toolkit.styles import Style

from stagecraft.core.keys import Key, KeySymbol
from stagecraft.core.presentation.colors import (
    StagecraftColors,
    StyleAndTextTuples,
    diff_fragments,
)
from stagecraft.core.session import SessionController
from stagecraft.core.view import ComposerView, SessionView
from stagecraft.domain.entities import COMMIT_PREFIXES, Mode

# prompt_toolkit key names -> abstract key symbols
PROMPT_TOOLKIT_KEYS: dict[str, Key] = {
    "up": Key.UP,
    "down": Key.DOWN,
    "left": Key.LEFT,
    "right": Key.RIGHT,
    "home": Key.HOME,
    "end": Key.END,
    "pageup": Key.PAGE_UP,
    "pagedown": Key.PAGE_DOWN,
    "enter": Key.ENTER,
    "escape": Key.ESC,
    "tab": Key.TAB,
    "space": Key.SPACE,
    "backspace": Key.BACKSPACE,
    "delete": Key.DELETE,
    "f1": Key.F1,
}

# Second key of an Esc-prefixed chord (terminals send Alt+key this way)
_ESCAPED_KEYS: dict[str, Key] = {
    Keys.Up: Key.UP,
    Keys.Down: Key.DOWN,
    Keys.Left: Key.LEFT,
    Keys.Right: Key.RIGHT,
    Keys.Home: Key.HOME,
    Keys.End: Key.END,
    Keys.PageUp: Key.PAGE_UP,
    Keys.PageDown: Key.PAGE_DOWN,
    Keys.Escape: Key.ESC,
    Keys.ControlI: Key.TAB,
    Keys.ControlH: Key.BACKSPACE,
    Keys.Delete: Key.DELETE,
    Keys.F1: Key.F1,
}

HELP_LINES = [
    "stagecraft - Keyboard Shortcuts",
    "",
    "File List Mode:",
    "  ↑/k, ↓/j     - Navigate files",
    "  Space        - Stage/unstage file",
    "  Enter/d      - View diff of selected file",
    "  c            - Start commit (if files are staged)",
    "  p            - Push to remote",
    "  r            - Refresh git status",
    "  h/?/F1       - Show this help",
    "  q            - Quit",
    "",
    "Commit Message Mode:",
    "  Tab          - Cycle through commit prefixes",
    "  Alt+Enter    - Insert a line break",
    "  ←/→ Home End - Move the cursor",
    "  Enter        - Commit changes",
    "  Esc          - Cancel commit",
    "",
    "Diff View Mode:",
    "  ↑/k, ↓/j     - Scroll",
    "  PgUp/PgDn    - Scroll by page",
    "  Esc/q        - Return to file list",
    "",
    "Ctrl+C quits from anywhere.",
    "Press Esc or q to close this help",
]

_MODE_HINTS: dict[Mode, str] = {
    Mode.FILE_LIST: "Press 'h' for help | 'q' to quit",
    Mode.DIFF_VIEW: "↑↓:scroll esc:back",
    Mode.COMMIT_COMPOSE: "tab:prefix enter:commit alt+enter:newline esc:cancel",
    Mode.HELP: "esc:close",
}


def _first_line(text: str) -> str:
    lines = text.strip().splitlines()
    return lines[0] if lines else ""


class SessionUI:
    """Interactive session UI using prompt_toolkit."""

    def __init__(
        self,
        controller: SessionController,
        input: Input | None = None,
        output: Output | None = None,
    ):
        """Initialize the session UI.

        Args:
            controller: Session state machine to drive.
            input: prompt_toolkit input (default: the terminal).
            output: prompt_toolkit output (default: the terminal).
        """
        self.controller = controller
        self._build_ui(input, output)

    def _build_ui(self, input: Input | None, output: Output | None) -> None:
        """Build the prompt_toolkit UI layout."""
        kb = self._create_key_bindings()

        header_window = Window(
            content=FormattedTextControl(self._get_header_text, focusable=False),
            height=Dimension.exact(1),
        )

        body_window = Window(
            content=FormattedTextControl(
                self._get_body_text,
                focusable=True,
                show_cursor=False,
                get_cursor_position=self._get_cursor_position,
            ),
            wrap_lines=False,
        )

        notification_window = Window(
            content=FormattedTextControl(self._get_notification_text, focusable=False),
            height=Dimension.exact(1),
        )

        status_window = Window(
            content=FormattedTextControl(self._get_status_text, focusable=False),
            height=Dimension.exact(1),
            style="class:statusbar",
        )

        main_container = HSplit([
            header_window,
            Window(height=Dimension.exact(1), char="─", style="class:separator"),
            body_window,
            Window(height=Dimension.exact(1), char="─", style="class:separator"),
            notification_window,
            status_window,
        ])

        style = Style.from_dict(StagecraftColors.get_prompt_toolkit_style())

        self.app: Application[Any] = Application(
            layout=Layout(main_container, focused_element=body_window),
            key_bindings=kb,
            style=style,
            full_screen=True,
            mouse_support=False,
            refresh_interval=self.controller.config.display.refresh_interval,
            input=input,
            output=output,
        )

    def _create_key_bindings(self) -> KeyBindings:
        """Create key bindings for the UI.

        Returns:
            KeyBindings object.
        """
        kb = KeyBindings()

        for pt_key, key in PROMPT_TOOLKIT_KEYS.items():
            kb.add(pt_key)(self._make_handler(key))

        kb.add("escape", "enter")(self._make_handler(Key.ALT_ENTER))

        @kb.add("escape", Keys.Any)
        def escaped(event: KeyPressEvent) -> None:
            second = event.key_sequence[-1]
            key: KeySymbol | None = _ESCAPED_KEYS.get(second.key)
            if key is None and len(second.data) == 1 and second.data.isprintable():
                key = second.data
            if key is not None:
                self.feed_escaped(key)
            if self.controller.should_quit:
                event.app.exit()

        @kb.add("<any>")
        def character(event: KeyPressEvent) -> None:
            data = event.data
            if len(data) == 1 and data.isprintable():
                self.feed(data)
            if self.controller.should_quit:
                event.app.exit()

        @kb.add(Keys.BracketedPaste)
        def paste(event: KeyPressEvent) -> None:
            # Pasted text only makes sense in the message editor
            if self.controller.mode != Mode.COMMIT_COMPOSE:
                return
            for char in event.data.replace("\r\n", "\n").replace("\r", "\n"):
                if char == "\n":
                    self.feed(Key.ALT_ENTER)
                elif char.isprintable():
                    self.feed(char)

        @kb.add("c-c")
        def exit_app(event: KeyPressEvent) -> None:
            event.app.exit()

        return kb

    def _make_handler(self, key: Key):
        def handler(event: KeyPressEvent) -> None:
            self.feed(key)
            if self.controller.should_quit:
                event.app.exit()

        return handler

    def feed(self, key: KeySymbol) -> None:
        """Pass one decoded key to the session controller."""
        self.controller.handle_key(key)

    def feed_escaped(self, key: KeySymbol) -> None:
        """Pass an Esc-prefixed key press (Alt+key) to the session controller.

        The message editor drops the Esc and takes the key alone. Other modes
        get Esc followed by the key.
        """
        if self.controller.mode != Mode.COMMIT_COMPOSE:
            self.feed(Key.ESC)
        self.feed(key)

    # === Rendering ===

    def _get_header_text(self) -> StyleAndTextTuples:
        view = self.controller.view()
        ahead_behind = ""
        if view.ahead > 0 or view.behind > 0:
            ahead_behind = f" (↑{view.ahead} ↓{view.behind})"
        branch = view.branch or "?"
        return [
            (
                "class:header",
                f" stagecraft - Branch: {branch}{ahead_behind} - Files: {view.entry_count}",
            )
        ]

    def _get_body_text(self) -> StyleAndTextTuples:
        view = self.controller.view()
        if view.mode == Mode.DIFF_VIEW:
            return self._render_diff(view)
        if view.mode == Mode.COMMIT_COMPOSE and view.composer is not None:
            return self._render_composer(view.composer)
        if view.mode == Mode.HELP:
            return [("", "\n".join(HELP_LINES))]
        return self._render_file_list(view)

    def _render_file_list(self, view: SessionView) -> StyleAndTextTuples:
        if not view.entries:
            return [("class:dimmed", "  Working tree clean - nothing to stage")]

        lines: StyleAndTextTuples = []
        for idx, entry in enumerate(view.entries):
            selected = idx == view.cursor_index
            marker = "▶ " if selected else "  "
            color = "class:staged" if entry.staged else "class:unstaged"
            row_style = "class:selected" if selected else ""
            lines.append((row_style, marker))
            lines.append((f"{color} {row_style}", f"{entry.staged_marker} {entry.glyph} "))
            lines.append((row_style, entry.path))
            lines.append(("", "\n"))
        return lines

    def _render_diff(self, view: SessionView) -> StyleAndTextTuples:
        title = f" Diff: {view.diff_path}\n" if view.diff_path else ""
        if view.diff_is_error:
            return [("class:dimmed", title), ("class:error", view.diff_text)]
        if not view.diff_text.strip():
            return [("class:dimmed", title), ("class:dimmed", "  (no changes to show)")]

        visible = "".join(view.diff_text.splitlines(keepends=True)[view.diff_scroll :])
        return [("class:dimmed", title)] + diff_fragments(visible)

    def _render_composer(self, composer: ComposerView) -> StyleAndTextTuples:
        fragments: StyleAndTextTuples = [("class:dimmed", " Prefix (Tab to cycle):")]
        for prefix in (None,) + COMMIT_PREFIXES:
            label = prefix or "none"
            style = "class:prefix.active" if prefix == composer.prefix else "class:dimmed"
            fragments.append(("", " "))
            fragments.append((style, label))
        fragments.append(("", "\n\n"))

        counter_style = "class:counter.warning" if composer.first_line_warning else "class:counter"
        fragments.append(("class:dimmed", " Commit Message "))
        fragments.append(
            (counter_style, f"({composer.first_line_length}/{composer.first_line_limit})")
        )
        fragments.append(("", "\n\n"))

        body, pos = composer.body, composer.cursor_pos
        under_cursor = body[pos] if pos < len(body) and body[pos] != "\n" else " "
        skip = 1 if pos < len(body) and body[pos] != "\n" else 0
        fragments.append(("", body[:pos]))
        fragments.append(("class:cursor", under_cursor))
        fragments.append(("", body[pos + skip :]))
        fragments.append(("", "\n\n"))

        if composer.is_valid:
            fragments.append(("class:dimmed", f" Commit as: {_first_line(composer.message)}"))
        else:
            fragments.append(("class:error", " Message is empty"))
        return fragments

    def _get_cursor_position(self) -> Point | None:
        """Keep the selected row (or the message cursor) scrolled into view."""
        view = self.controller.view()
        if view.mode == Mode.FILE_LIST and view.cursor_index is not None:
            return Point(x=0, y=view.cursor_index)
        if view.mode == Mode.COMMIT_COMPOSE and view.composer is not None:
            before = view.composer.body[: view.composer.cursor_pos]
            line = before.count("\n")
            column = len(before) - (before.rfind("\n") + 1)
            return Point(x=column, y=4 + line)
        return Point(x=0, y=0)

    def _get_notification_text(self) -> StyleAndTextTuples:
        status = self.controller.view().status
        if status is None:
            return [("", "")]
        return [(f"class:notification.{status.level}", f" {_first_line(status.text)} ")]

    def _get_status_text(self) -> StyleAndTextTuples:
        mode = self.controller.mode
        return [("", f" Mode: {mode.label} | {_MODE_HINTS[mode]}")]

    async def run_async(self) -> None:
        """Run the session UI asynchronously until the operator quits."""
        await self.app.run_async()

    def run(self, suppress_logging: bool = True) -> None:
        """Run the session UI.

        Suppresses all logging output during TUI execution to prevent display
        corruption, then restores original logging state after exit.

        Args:
            suppress_logging: Disable logging while the UI runs. Pass False
                when logs go to a file rather than the terminal.
        """
        if not suppress_logging:
            asyncio.run(self.run_async())
            return

        # prompt_toolkit runs in full-screen mode, so any stderr output
        # (including logging) will corrupt the UI
        logging.disable(logging.CRITICAL)
        try:
            asyncio.run(self.run_async())
        finally:
            logging.disable(logging.NOTSET)
