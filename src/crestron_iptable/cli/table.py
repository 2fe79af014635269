from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from crestron_iptable.models import IPTable, IPTableEntry
from crestron_iptable.storage import save_entries
from crestron_iptable.utils.redaction import Redactor

from .common import fail, hex_id, load_settings_or_exit, open_manager, resolve_slot

SlotOption = Annotated[
    int | None,
    typer.Option("--slot", "-p", help="Program slot (0 = all slots)"),
]


def _load_or_exit(slot: int | None) -> tuple[int, IPTable]:
    settings = load_settings_or_exit()
    program_slot = resolve_slot(settings, slot)
    table = IPTable(slot=program_slot)

    with open_manager(settings) as manager:
        try:
            loaded = manager.load_table(program_slot, table)
        except ValueError as exc:
            raise fail(str(exc)) from exc

    if not loaded:
        raise fail(f"No IP table returned for slot {program_slot}")
    return program_slot, table


def show(
    slot: SlotOption = None,
    redact: Annotated[
        bool, typer.Option("--redact", help="Redact addresses in output")
    ] = False,
    raw: Annotated[
        bool, typer.Option("--raw", help="Print the processor rows as received")
    ] = False,
) -> None:
    """Show the IP table of a program slot."""
    program_slot, table = _load_or_exit(slot)
    console = Console()

    if raw:
        for line in (table.raw_header, table.raw_separator, *table.raw_entries):
            if line:
                typer.echo(line)
        return

    if table.count == 0:
        console.print(f"IP table for slot {program_slot} is empty.")
        return

    redactor = Redactor(enabled=redact)
    output = Table(title=f"IP Table for Slot {program_slot}")
    output.add_column("CIP_ID", style="cyan")
    output.add_column("Type")
    output.add_column("Status")
    output.add_column("DevID", style="cyan")
    output.add_column("Port")
    output.add_column("IP Address/SiteName", style="green")
    output.add_column("Model Name")
    output.add_column("Description")
    output.add_column("RoomId")

    for entry in table.entries:
        status_style = "green" if entry.status.upper() == "ONLINE" else "yellow"
        output.add_row(
            f"{entry.cip_id:X}",
            entry.type,
            f"[{status_style}]{entry.status}[/{status_style}]",
            f"{entry.device_id:X}",
            str(entry.port),
            redactor.redact_ip(entry.ip_address),
            entry.model_name,
            entry.description,
            entry.room_id,
        )

    console.print(output)
    console.print(f"\n[green]{table.count} entr{'y' if table.count == 1 else 'ies'}[/green]")


def lookup(
    cip_id: Annotated[
        int, typer.Argument(parser=hex_id, help="CIP_ID to look up (hex)")
    ],
    slot: SlotOption = None,
) -> None:
    """Look up a single CIP_ID in the IP table."""
    settings = load_settings_or_exit()
    program_slot = resolve_slot(settings, slot)
    found = IPTableEntry()

    with open_manager(settings) as manager:
        try:
            exists = manager.entry_exists(program_slot, cip_id, found)
        except ValueError as exc:
            raise fail(str(exc)) from exc

    if not exists:
        Console().print(
            f"[yellow]![/yellow] CIP_ID {cip_id:X} not found in slot {program_slot}"
        )
        raise typer.Exit(1)
    typer.echo(str(found))


def export(
    path: Annotated[Path, typer.Argument(help="JSON file to write")],
    slot: SlotOption = None,
) -> None:
    """Save the IP table of a program slot as a JSON peer list."""
    _, table = _load_or_exit(slot)
    save_entries(table.entries, path)

    console = Console()
    console.print(f"[green]✓[/green] Exported {table.count} entries to {path}")


def register(app: typer.Typer) -> None:
    app.command()(show)
    app.command()(lookup)
    app.command()(export)
