"""Git command-line adapter."""

from stagecraft.adapters.git_cmd.git_adapter import GitAdapter

__all__ = ["GitAdapter"]
