"""Test helper utilities for the stagecraft test suite."""

from tests.helpers.cli_assertions import (
    assert_command_failed,
    assert_command_success,
    assert_output_contains,
)
from tests.helpers.fake_vcs import FakeVCS, entry

__all__ = [
    "assert_command_success",
    "assert_command_failed",
    "assert_output_contains",
    "FakeVCS",
    "entry",
]
