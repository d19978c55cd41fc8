"""
Probe command implementation.
"""

import typer

from bqplane.bigquery.credentials import CredentialResolver
from bqplane.bigquery.operations import table_exists
from bqplane.cli.context import CommandContext
from bqplane.exceptions import AuthenticationFailure
from bqplane.params import RequestParamsProvider


def cmd_probe(request_file: str, side: str = "destination", verbose: bool = False) -> None:
    """Check whether the source or destination table exists."""
    try:
        ctx = CommandContext(request_file=request_file, verbose=verbose)
        provider = RequestParamsProvider()
        if side == "source":
            params = provider.provide_source_params(ctx.request)
        else:
            params = provider.provide_sink_params(ctx.request)

        client = CredentialResolver(ctx.settings.token_lifetime).create_client(params)
    except (OSError, ValueError, AuthenticationFailure) as e:
        CommandContext.handle_error(e, verbose)
        return

    try:
        if table_exists(client, params.table_path):
            typer.echo(f"✅ Table {params.table_path} exists")
        else:
            typer.echo(f"⚠️  Table {params.table_path} does not exist")
    finally:
        client.close()
