"""
bqplane CLI Main Module

Command-line interface for BigQuery part-stream transfers.
"""

import typer

from bqplane.cli.commands import cmd_parameterize, cmd_probe, cmd_schema, cmd_transfer


class AlphabeticalOrderGroup(typer.core.TyperGroup):
    """Custom Typer Group that lists commands in alphabetical order."""

    def list_commands(self, ctx: typer.Context) -> list[str]:
        return sorted(self.commands.keys())


def validate_strategy(value: str | None) -> str | None:
    """Validate the write strategy option."""
    if value is None:
        return None
    if value.lower() not in ("streaming", "dml"):
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Invalid write strategy '{value}'. Must be 'streaming' or 'dml'."
        )
    return value.lower()


def validate_side(value: str) -> str:
    """Validate the probe side option."""
    if value not in ("source", "destination"):
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Invalid side '{value}'. Must be 'source' or 'destination'."
        )
    return value


app = typer.Typer(
    name="bqplane",
    help="bqplane - move tables between BigQuery and a transfer pipeline",
    add_completion=False,
    rich_markup_mode="rich",
    cls=AlphabeticalOrderGroup,
    invoke_without_command=True,
)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Main CLI callback - shows help when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# Common option definitions to reduce duplication
REQUEST_FILE_ARG = typer.Argument(..., help="Path to the transfer request file (JSON or YAML)")
VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Enable verbose output")


@app.command()
def transfer(
    request_file: str = REQUEST_FILE_ARG,
    strategy: str | None = typer.Option(
        None,
        "-s",
        "--strategy",
        help="Write strategy: streaming or dml (overrides configuration)",
        callback=validate_strategy,
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Move a table from the source address to the destination address."""
    cmd_transfer(request_file=request_file, strategy=strategy, verbose=verbose)


@app.command()
def probe(
    request_file: str = REQUEST_FILE_ARG,
    side: str = typer.Option(
        "destination", "--side", help="Which address to probe", callback=validate_side
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Check whether the source or destination table exists."""
    cmd_probe(request_file=request_file, side=side, verbose=verbose)


@app.command()
def parameterize(
    request_file: str = REQUEST_FILE_ARG,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Print the source query with @@name parameters substituted."""
    cmd_parameterize(request_file=request_file, verbose=verbose)


@app.command()
def schema(
    request_file: str = REQUEST_FILE_ARG,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Run the source query and print the schema it produces."""
    cmd_schema(request_file=request_file, verbose=verbose)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
