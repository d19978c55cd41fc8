"""
Parameterize command implementation.
"""

import typer

from bqplane.cli.context import CommandContext
from bqplane.bigquery.parameters import find_parameters
from bqplane.bigquery.source import BigQueryDataSource
from bqplane.params import RequestParamsProvider


def cmd_parameterize(request_file: str, verbose: bool = False) -> None:
    """Print the source query after @@name substitution."""
    try:
        ctx = CommandContext(request_file=request_file, verbose=verbose)
        params = RequestParamsProvider().provide_source_params(ctx.request)
    except (OSError, ValueError) as e:
        CommandContext.handle_error(e, verbose)
        return

    source = BigQueryDataSource(params, request_id=ctx.request.id)
    if verbose and params.query:
        names = find_parameters(params.query)
        typer.echo(f"Parameters: {', '.join(names) if names else '(none)'}")
    typer.echo(source.build_query())
