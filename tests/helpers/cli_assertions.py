"""CLI output assertion helpers for reducing test brittleness.

These helpers prioritize semantic assertions (exit codes) over exact string
matching, and print the command output when an assertion fails.
"""

from click.testing import Result


def assert_command_success(result: Result, *, context: str = "") -> None:
    """Assert that a CLI command succeeded.

    Args:
        result: Click test runner Result object.
        context: Optional context string for error messages.
    """
    ctx = f" ({context})" if context else ""
    assert result.exit_code == 0, (
        f"Command failed{ctx}:\n"
        f"  Exit code: {result.exit_code}\n"
        f"  Output: {result.output[:500]}"
    )


def assert_command_failed(
    result: Result,
    *,
    expected_code: int = 1,
    context: str = "",
) -> None:
    """Assert that a CLI command failed with expected exit code.

    Args:
        result: Click test runner Result object.
        expected_code: Expected non-zero exit code (default: 1).
        context: Optional context string for error messages.
    """
    ctx = f" ({context})" if context else ""
    assert result.exit_code == expected_code, (
        f"Expected command to fail{ctx} with code {expected_code}, "
        f"but got {result.exit_code}:\n"
        f"  Output: {result.output[:500]}"
    )


def assert_output_contains(
    result: Result,
    *substrings: str,
    case_sensitive: bool = True,
    context: str = "",
) -> None:
    """Assert that output contains all specified substrings.

    Args:
        result: Click test runner Result object.
        *substrings: One or more substrings that must appear in output.
        case_sensitive: Whether to do case-sensitive matching.
        context: Optional context string for error messages.
    """
    ctx = f" ({context})" if context else ""
    output = result.output if case_sensitive else result.output.lower()

    for substring in substrings:
        check = substring if case_sensitive else substring.lower()
        assert check in output, (
            f"Substring not found{ctx}:\n"
            f"  Expected: {substring!r}\n"
            f"  Output: {result.output[:500]}"
        )
