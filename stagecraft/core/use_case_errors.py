"""Session error handling utilities.

Provides consistent handling of the domain errors raised while the session
talks to its collaborators. The session never lets these escape: they become
status messages.

Design principles:
1. CollaboratorError is shown as the collaborator reported it
2. Other StagecraftDomainError subclasses carry user-friendly messages
3. Anything else is a bug and propagates
"""

import logging

from stagecraft.domain.exceptions import CollaboratorError, StagecraftDomainError

logger = logging.getLogger(__name__)


def format_error_message(exception: StagecraftDomainError) -> str:
    """Format a domain error into a status message.

    - CollaboratorError: the collaborator's detail, verbatim
    - StagecraftDomainError: the error's message

    Args:
        exception: The error that was caught.

    Returns:
        User-friendly error message string.
    """
    if isinstance(exception, CollaboratorError):
        return exception.detail
    return exception.message


def log_use_case_error(exception: StagecraftDomainError) -> None:
    """Log a domain error caught by the session.

    Logged at WARNING: the operator sees it as a status message and can retry.

    Args:
        exception: The error that was caught.
    """
    logger.warning(str(exception))
