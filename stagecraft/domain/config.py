"""Config domain models for stagecraft.

Configuration is assembled from built-in defaults and command-line options.
This module defines the domain models that represent validated configuration
state for a single session.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GitConfig:
    """Configuration for the git collaborator.

    Attributes:
        executable: git binary to invoke (name on PATH or absolute path).
        timeout: Seconds before a single git call is abandoned. Push is the
                 only call expected to come anywhere near it.

    Raises:
        ValueError: If executable is empty or timeout is not positive.
    """

    executable: str = "git"
    timeout: float = 60.0

    def __post_init__(self) -> None:
        """Validate git config after initialization."""
        if not self.executable:
            raise ValueError("executable cannot be empty")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")


@dataclass(frozen=True)
class DisplayConfig:
    """Configuration for the terminal front-end.

    Attributes:
        first_line_limit: Advisory length of a commit subject line (default: 50).
                          Longer subjects are flagged, never rejected.
        notification_seconds: How long a status message stays visible (default: 3).
        refresh_interval: Seconds between redraws while idle, so expired
                          notifications disappear (default: 0.5).

    Raises:
        ValueError: If any value is not positive.
    """

    first_line_limit: int = 50
    notification_seconds: float = 3.0
    refresh_interval: float = 0.5

    def __post_init__(self) -> None:
        """Validate display config after initialization."""
        if self.first_line_limit <= 0:
            raise ValueError(
                f"first_line_limit must be positive, got {self.first_line_limit}"
            )
        if self.notification_seconds <= 0:
            raise ValueError(
                f"notification_seconds must be positive, got {self.notification_seconds}"
            )
        if self.refresh_interval <= 0:
            raise ValueError(
                f"refresh_interval must be positive, got {self.refresh_interval}"
            )


@dataclass(frozen=True)
class StagecraftConfig:
    """Complete stagecraft configuration.

    Attributes:
        git: Git collaborator configuration
        display: Display and notification configuration
    """

    git: GitConfig = field(default_factory=GitConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @staticmethod
    def default() -> "StagecraftConfig":
        """Create a config with all default values."""
        return StagecraftConfig(git=GitConfig(), display=DisplayConfig())
