"""Presentation helpers for the terminal UI.

Components:
- StagecraftColors: prompt_toolkit style classes
- diff_fragments: Pygments-based diff coloring
"""

from stagecraft.core.presentation.colors import StagecraftColors, diff_fragments

__all__ = ["StagecraftColors", "diff_fragments"]
