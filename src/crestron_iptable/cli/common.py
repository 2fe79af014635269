from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import typer

from crestron_iptable.config import Settings, get_settings, resolve_config_path
from crestron_iptable.console import ConsoleTransport, SSHConsole
from crestron_iptable.manager import IPTableManager
from crestron_iptable.mock_console import MockConsole
from crestron_iptable.parsing import HEX_RE


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def fail(message: str) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(1)


def hex_id(value: str) -> int:
    """Parse a CIP_ID/device ID written as plain hex digits, e.g. 1A."""
    if not HEX_RE.fullmatch(value):
        raise ValueError(f"{value!r} is not a hex ID")
    return int(value, 16)


def resolve_slot(settings: Settings, slot: int | None) -> int:
    return settings.defaults.program_slot if slot is None else slot


def build_console(settings: Settings) -> ConsoleTransport:
    if settings.console.backend == "mock":
        return MockConsole.with_sample_entries()
    return SSHConsole(
        host=settings.console.host,
        username=settings.console.username,
        password=settings.console.password or None,
        port=settings.console.port,
        timeout=settings.console.timeout,
        prompt=settings.console.prompt,
    )


@contextmanager
def open_manager(settings: Settings) -> Iterator[IPTableManager]:
    console = build_console(settings)
    if not isinstance(console, SSHConsole):
        yield IPTableManager(console)
        return

    try:
        console.connect()
    except ConnectionError as exc:
        raise fail(str(exc)) from exc
    try:
        yield IPTableManager(console)
    finally:
        console.close()
