"""
Schema command implementation.
"""

import json

import typer

from bqplane.bigquery.credentials import CredentialResolver
from bqplane.bigquery.schema import decode_schema
from bqplane.bigquery.source import BigQueryDataSource
from bqplane.cli.context import CommandContext
from bqplane.params import RequestParamsProvider


def cmd_schema(request_file: str, verbose: bool = False) -> None:
    """Run the source query and print the schema part."""
    try:
        ctx = CommandContext(request_file=request_file, verbose=verbose)
        params = RequestParamsProvider().provide_source_params(ctx.request)
    except (OSError, ValueError) as e:
        CommandContext.handle_error(e, verbose)
        return

    source = BigQueryDataSource(
        params,
        request_id=ctx.request.id,
        resolver=CredentialResolver(ctx.settings.token_lifetime),
        labels=ctx.settings.job_labels,
    )
    try:
        result = source.open_part_stream()
        if result.failed:
            CommandContext.handle_error(RuntimeError(result.failure_detail), verbose)
            return

        schema_part = next(iter(result.content))
        with schema_part.open_stream() as stream:
            schema = decode_schema(stream.read())
    finally:
        source.close()

    typer.echo(json.dumps(schema, indent=2))
