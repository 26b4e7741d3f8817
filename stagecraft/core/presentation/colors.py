"""Centralized color definitions for the stagecraft terminal UI.

Provides the prompt_toolkit style classes used by every pane, and turns diff
text into styled fragments using Pygments' diff lexer.
"""

from pygments.lexers.diff import DiffLexer
from pygments.token import Generic, Token, _TokenType

# prompt_toolkit formatted text: list of (style, text) tuples
StyleAndTextTuples = list[tuple[str, str]]

# Pygments diff tokens -> prompt_toolkit style classes
_DIFF_TOKEN_CLASSES: dict[_TokenType, str] = {
    Generic.Inserted: "class:diff.added",
    Generic.Deleted: "class:diff.removed",
    Generic.Subheading: "class:diff.hunk",
    Generic.Heading: "class:diff.header",
    Generic.Strong: "class:diff.header",
}


class StagecraftColors:
    """Color palette for the terminal UI.

    Uses ANSI color names so colors adapt to the user's terminal theme.
    """

    STAGED = "fg:ansigreen"
    UNSTAGED = "fg:ansired"

    @staticmethod
    def get_prompt_toolkit_style() -> dict[str, str]:
        """Get style dictionary for prompt_toolkit Style.from_dict().

        Returns:
            Dictionary mapping style class names to style definitions.

        Example:
            from prompt_toolkit.styles import Style
            style = Style.from_dict(StagecraftColors.get_prompt_toolkit_style())
        """
        return {
            "header": "fg:ansiyellow bold",
            "separator": "fg:ansibrightblack",
            "dimmed": "fg:ansibrightblack",
            "selected": "reverse",
            "staged": StagecraftColors.STAGED,
            "unstaged": StagecraftColors.UNSTAGED,
            "prefix.active": "fg:ansiyellow bold",
            "cursor": "reverse",
            "counter": "",
            "counter.warning": "fg:ansired bold",
            "statusbar": "fg:ansiwhite bg:ansiblue",
            "notification.info": "fg:ansicyan",
            "notification.success": "fg:ansigreen",
            "notification.error": "fg:ansiwhite bg:ansired",
            "error": "fg:ansired",
            "diff.added": "fg:ansigreen",
            "diff.removed": "fg:ansired",
            "diff.hunk": "fg:ansicyan",
            "diff.header": "bold",
        }


def _diff_class(token_type: _TokenType) -> str:
    """Find the style class for a token, walking up to its parent types."""
    while token_type is not Token:
        if token_type in _DIFF_TOKEN_CLASSES:
            return _DIFF_TOKEN_CLASSES[token_type]
        token_type = token_type.parent
    return ""


def diff_fragments(text: str) -> StyleAndTextTuples:
    """Convert unified diff text into styled prompt_toolkit fragments.

    Args:
        text: Diff text.

    Returns:
        List of (style, text) tuples; concatenated texts equal the input
        (plus the trailing newline Pygments guarantees).
    """
    lexer = DiffLexer(stripnl=False, ensurenl=True)
    return [(_diff_class(token_type), value) for token_type, value in lexer.get_tokens(text)]
