"""stagecraft CLI entrypoint.

Command-line interface that opens the interactive staging session.
"""

from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path

import click

from stagecraft.core.errors import StagecraftCliError, repo_not_found_error
from stagecraft.domain.config import DisplayConfig, GitConfig, StagecraftConfig
from stagecraft.domain.exceptions import StagecraftDomainError
from stagecraft.version import __version__

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    StagecraftCliError exceptions are re-raised to use their built-in
    formatting; domain and runtime errors are converted into
    StagecraftCliError with a hint.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except StagecraftCliError:
                raise
            except StagecraftDomainError as e:
                raise StagecraftCliError(e.message, hint=e.hint) from e
            except ValueError as e:
                # Invalid configuration values
                raise StagecraftCliError(str(e)) from e
            except RuntimeError as e:
                raise StagecraftCliError(
                    str(e),
                    hint="Run with --verbose --log-file PATH for more details",
                ) from e

        return wrapper

    return decorator


def configure_logging(verbose: bool, log_file: Path | None) -> None:
    """Configure the root logger for a session.

    Args:
        verbose: Log at DEBUG instead of WARNING.
        log_file: Write logs to this file instead of stderr.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    if log_file is not None:
        logging.basicConfig(filename=str(log_file), level=level, format=LOG_FORMAT, force=True)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def build_config(git_executable: str, git_timeout: float) -> StagecraftConfig:
    """Build session configuration from command-line options.

    Raises:
        ValueError: If an option value is invalid.
    """
    return StagecraftConfig(
        git=GitConfig(executable=git_executable, timeout=git_timeout),
        display=DisplayConfig(),
    )


@click.command()
@click.version_option(version=__version__, prog_name="stagecraft")
@click.option(
    "--repo",
    "-C",
    "repo",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Start in this directory instead of the current one.",
)
@click.option(
    "--git",
    "git_executable",
    default="git",
    show_default=True,
    help="git executable to run.",
)
@click.option(
    "--git-timeout",
    type=float,
    default=60.0,
    show_default=True,
    help="Seconds before a single git call is abandoned.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write logs to this file (logging is otherwise muted while the UI runs).",
)
@handle_cli_errors("stagecraft")
def cli(
    repo: Path,
    git_executable: str,
    git_timeout: float,
    verbose: bool,
    log_file: Path | None,
) -> None:
    """stagecraft - stage, diff, commit and push from one terminal screen.

    Opens a full-screen view of the changed files in the current git work
    tree. Press 'h' inside the UI for the key reference.
    """
    configure_logging(verbose, log_file)
    config = build_config(git_executable, git_timeout)

    # Lazy imports keep --help and --version fast
    from stagecraft.adapters.git_cmd import GitAdapter
    from stagecraft.adapters.tui.session_ui import SessionUI
    from stagecraft.core.session import SessionController

    try:
        vcs = GitAdapter(repo, config.git)
    except RuntimeError:
        repo_not_found_error(repo.resolve())

    logger.info("Starting session in %s", vcs.repo_root)
    controller = SessionController(vcs, config)
    # A failed first refresh is shown in the UI, not fatal
    controller.refresh()

    ui = SessionUI(controller)
    ui.run(suppress_logging=log_file is None)


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli()
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
