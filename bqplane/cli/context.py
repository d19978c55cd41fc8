"""
Command context for shared setup across CLI commands.
"""

import traceback

import typer

from bqplane.config import WRITE_STRATEGIES, load_settings
from bqplane.exceptions import ConfigurationError

from .utils import load_request, setup_logging


class CommandContext:
    """
    Shared context for CLI commands.

    Handles common setup: logging, settings, and loading the request file.
    """

    def __init__(
        self,
        request_file: str,
        verbose: bool = False,
        strategy: str | None = None,
        project_root: str | None = None,
    ):
        self.verbose = verbose
        setup_logging(self.verbose)

        self.settings = load_settings(project_root)
        if strategy:
            strategy = strategy.lower()
            if strategy not in WRITE_STRATEGIES:
                raise ConfigurationError(f"Unsupported write strategy: {strategy}")
            self.settings.write_strategy = strategy

        self.request = load_request(request_file)

    @staticmethod
    def handle_error(error: Exception, verbose: bool = False) -> None:
        """
        Print an error consistently and exit with status 1.

        Args:
            error: The exception that occurred
            verbose: Whether to print the traceback
        """
        error_prefix = typer.style("Error: ", fg=typer.colors.RED, bold=True)
        typer.echo(f"{error_prefix}{error}", err=True)
        if verbose:
            traceback.print_exc()
        raise typer.Exit(1)
