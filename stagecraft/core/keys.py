"""Abstract key symbols, session actions, and the per-mode key maps.

Terminal adapters decode raw input into a Key (named keys) or a single
printable character (str). The session translates those into Actions using
the key map of the active mode; anything missing from that map is ignored.
"""

from enum import Enum

from stagecraft.domain.entities import Mode


class Key(str, Enum):
    """Named (non-character) keys."""

    UP = "<up>"
    DOWN = "<down>"
    LEFT = "<left>"
    RIGHT = "<right>"
    HOME = "<home>"
    END = "<end>"
    PAGE_UP = "<pageup>"
    PAGE_DOWN = "<pagedown>"
    ENTER = "<enter>"
    ALT_ENTER = "<alt-enter>"
    ESC = "<esc>"
    TAB = "<tab>"
    SPACE = "<space>"
    BACKSPACE = "<backspace>"
    DELETE = "<delete>"
    F1 = "<f1>"


# A decoded key: a named Key or a single printable character.
KeySymbol = Key | str


class Action(str, Enum):
    """Events the session state machine reacts to."""

    # File list
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    SELECT_DIFF = "select_diff"
    TOGGLE_STAGE = "toggle_stage"
    START_COMMIT = "start_commit"
    PUSH = "push"
    REFRESH = "refresh"
    HELP = "help"
    QUIT = "quit"

    # Diff view
    BACK = "back"
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"

    # Commit composer
    INSERT_TEXT = "insert_text"
    NEWLINE = "newline"
    DELETE_BACKWARD = "delete_backward"
    DELETE_FORWARD = "delete_forward"
    CURSOR_LEFT = "cursor_left"
    CURSOR_RIGHT = "cursor_right"
    CURSOR_HOME = "cursor_home"
    CURSOR_END = "cursor_end"
    CYCLE_PREFIX = "cycle_prefix"
    CONFIRM = "confirm"
    CANCEL = "cancel"

    # Help
    DISMISS = "dismiss"


FILE_LIST_KEYMAP: dict[KeySymbol, Action] = {
    Key.UP: Action.MOVE_UP,
    "k": Action.MOVE_UP,
    Key.DOWN: Action.MOVE_DOWN,
    "j": Action.MOVE_DOWN,
    Key.SPACE: Action.TOGGLE_STAGE,
    " ": Action.TOGGLE_STAGE,
    Key.ENTER: Action.SELECT_DIFF,
    "d": Action.SELECT_DIFF,
    "c": Action.START_COMMIT,
    "p": Action.PUSH,
    "r": Action.REFRESH,
    "h": Action.HELP,
    "?": Action.HELP,
    Key.F1: Action.HELP,
    "q": Action.QUIT,
}

DIFF_VIEW_KEYMAP: dict[KeySymbol, Action] = {
    Key.ESC: Action.BACK,
    "q": Action.BACK,
    Key.UP: Action.SCROLL_UP,
    "k": Action.SCROLL_UP,
    Key.DOWN: Action.SCROLL_DOWN,
    "j": Action.SCROLL_DOWN,
    Key.PAGE_UP: Action.PAGE_UP,
    Key.PAGE_DOWN: Action.PAGE_DOWN,
}

# Printable characters not listed here are inserted into the message.
COMMIT_COMPOSE_KEYMAP: dict[KeySymbol, Action] = {
    Key.ENTER: Action.CONFIRM,
    Key.ESC: Action.CANCEL,
    Key.TAB: Action.CYCLE_PREFIX,
    Key.ALT_ENTER: Action.NEWLINE,
    Key.BACKSPACE: Action.DELETE_BACKWARD,
    Key.DELETE: Action.DELETE_FORWARD,
    Key.LEFT: Action.CURSOR_LEFT,
    Key.RIGHT: Action.CURSOR_RIGHT,
    Key.HOME: Action.CURSOR_HOME,
    Key.END: Action.CURSOR_END,
}

HELP_KEYMAP: dict[KeySymbol, Action] = {
    Key.ESC: Action.DISMISS,
    "q": Action.DISMISS,
    "h": Action.DISMISS,
    "?": Action.DISMISS,
    Key.F1: Action.DISMISS,
}

KEYMAPS: dict[Mode, dict[KeySymbol, Action]] = {
    Mode.FILE_LIST: FILE_LIST_KEYMAP,
    Mode.DIFF_VIEW: DIFF_VIEW_KEYMAP,
    Mode.COMMIT_COMPOSE: COMMIT_COMPOSE_KEYMAP,
    Mode.HELP: HELP_KEYMAP,
}


def translate_key(mode: Mode, key: KeySymbol) -> tuple[Action, str | None] | None:
    """Translate a key symbol into an action for the given mode.

    Args:
        mode: Active session mode.
        key: Decoded key symbol.

    Returns:
        Tuple of (action, text) where text is the character to insert for
        Action.INSERT_TEXT and None otherwise, or None if the key means
        nothing in this mode.
    """
    action = KEYMAPS[mode].get(key)
    if action is not None:
        return (action, None)

    if mode != Mode.COMMIT_COMPOSE:
        return None

    if key == Key.SPACE:
        return (Action.INSERT_TEXT, " ")
    if not isinstance(key, Key) and len(key) == 1 and key.isprintable():
        return (Action.INSERT_TEXT, key)
    return None
