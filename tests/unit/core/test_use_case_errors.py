"""Tests for session error handling utilities."""

import logging

import pytest

from stagecraft.core.use_case_errors import format_error_message, log_use_case_error
from stagecraft.domain.exceptions import (
    CollaboratorError,
    CommitValidationError,
    StagecraftDomainError,
)


class TestFormatErrorMessage:
    """Tests for format_error_message utility function."""

    def test_collaborator_error_uses_detail_verbatim(self) -> None:
        """CollaboratorError shows exactly what git reported."""
        error = CollaboratorError("push", "fatal: no upstream configured")
        assert format_error_message(error) == "fatal: no upstream configured"

    def test_domain_error_uses_message_directly(self) -> None:
        """Other domain errors use their message directly."""
        error = CommitValidationError("Commit message cannot be empty")
        assert format_error_message(error) == "Commit message cannot be empty"

    def test_custom_subclass_works_with_format(self) -> None:
        """Custom StagecraftDomainError subclasses work with format_error_message."""

        class CustomError(StagecraftDomainError):
            def __init__(self, detail: str) -> None:
                super().__init__(f"Custom: {detail}")

        assert format_error_message(CustomError("specific detail")) == "Custom: specific detail"


class TestLogUseCaseError:
    """Tests for log_use_case_error utility function."""

    def test_logged_at_warning_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            log_use_case_error(CollaboratorError("push", "no upstream"))

        assert caplog.records[-1].levelno == logging.WARNING

    def test_operation_named_once(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            log_use_case_error(CollaboratorError("push", "no upstream"))

        assert caplog.records[-1].getMessage() == "push failed: no upstream"
