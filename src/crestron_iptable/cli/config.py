from __future__ import annotations

from typing import Annotated

import typer

from crestron_iptable.config import (
    ConsoleConfig,
    Settings,
    render_settings_toml,
    write_settings,
)

from .common import load_settings_or_exit, resolve_config_path_or_exit

app = typer.Typer(no_args_is_help=True)


@app.command("show")
def show_config() -> None:
    """Print the active configuration and where it came from."""
    settings = load_settings_or_exit()
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    typer.echo(f"Config source: {path if exists else 'defaults'}")
    typer.echo(render_settings_toml(settings))


@app.command("path")
def config_path() -> None:
    """Print the config file location."""
    path, _ = resolve_config_path_or_exit(allow_missing=True)
    typer.echo(str(path))


@app.command("init")
def init_config(
    host: Annotated[
        str | None, typer.Option("--host", help="Processor address")
    ] = None,
    username: Annotated[
        str | None, typer.Option("--username", "-u", help="Console user")
    ] = None,
    mock: Annotated[
        bool, typer.Option("--mock", help="Use the in-memory processor")
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Write a config file for a processor."""
    path, exists = resolve_config_path_or_exit(allow_missing=True)

    if exists and not force:
        typer.echo(f"Config already exists at {path}")
        return

    defaults = ConsoleConfig()
    console = ConsoleConfig(
        backend="mock" if mock else "ssh",
        host=host or defaults.host,
        username=username or defaults.username,
    )
    write_settings(Settings(console=console), path)
    typer.echo(f"Wrote config for {console.backend} console {console.host} to {path}")
