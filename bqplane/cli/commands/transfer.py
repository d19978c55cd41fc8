"""
Transfer command implementation.
"""

import typer

from bqplane.cli.context import CommandContext
from bqplane.registry import build_registry
from bqplane.transfer import run_transfer


def cmd_transfer(
    request_file: str,
    strategy: str | None = None,
    verbose: bool = False,
) -> None:
    """Execute the transfer described by a request file."""
    try:
        ctx = CommandContext(request_file=request_file, verbose=verbose, strategy=strategy)
        request = ctx.request
        typer.echo(f"Transferring {request.id} using {ctx.settings.write_strategy} writes")

        result = run_transfer(request, ctx.settings, build_registry(ctx.settings))
    except (OSError, ValueError) as e:
        CommandContext.handle_error(e, verbose)
        return

    if result.failed:
        CommandContext.handle_error(RuntimeError(result.failure_detail), verbose)
        return

    typer.echo("✅ Transfer completed successfully")
