from __future__ import annotations

from typing import Annotated

import typer

from crestron_iptable.utils.logging import setup_logging

from . import config as config_cmd
from .peers import register as register_peers
from .table import register as register_table

app = typer.Typer(
    help="Read and edit a control processor's IP table", no_args_is_help=True
)

app.add_typer(config_cmd.app, name="config", help="Show or create the config file")

register_table(app)
register_peers(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Log console commands and responses"),
    ] = False,
) -> None:
    """crestron-iptable CLI."""
    setup_logging(verbose)

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"crestron-iptable version {get_version('crestron-iptable')}")
        raise typer.Exit()
