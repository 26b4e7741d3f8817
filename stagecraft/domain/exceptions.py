"""Domain exceptions for stagecraft.

These exceptions represent failures the interactive session knows how to
recover from. They are caught at the session boundary and converted to
transient status messages, or at the CLI boundary and converted to
user-facing error messages.
"""


class StagecraftDomainError(Exception):
    """Base exception for all domain errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class CollaboratorError(StagecraftDomainError):
    """Raised when a call to the version-control collaborator fails.

    Covers non-zero git exits, a missing git executable, I/O failures and
    timeouts. It is the only error kind crossing the VCS port.

    Attributes:
        operation: Collaborator operation that failed (e.g. "push").
        detail: What the collaborator reported, suitable for display.
    """

    def __init__(self, operation: str, detail: str, hint: str | None = None) -> None:
        super().__init__(f"{operation} failed: {detail}", hint=hint)
        self.operation = operation
        self.detail = detail


class CommitValidationError(StagecraftDomainError):
    """Raised when a commit is attempted with an empty message."""

    pass
