from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from crestron_iptable.storage import load_entries

from .common import fail, hex_id, load_settings_or_exit, open_manager, resolve_slot

SlotOption = Annotated[
    int | None,
    typer.Option("--slot", "-p", help="Program slot (0 = running program)"),
]


def add(
    cip_id: Annotated[int, typer.Argument(parser=hex_id, help="CIP_ID (hex)")],
    ip_address: Annotated[str, typer.Argument(help="IP address or hostname")],
    slot: SlotOption = None,
    remap: Annotated[
        int | None,
        typer.Option(
            "--remap", "-D", parser=hex_id, help="Programmed device ID to remap (hex)"
        ),
    ] = None,
) -> None:
    """Add a peer entry to the IP table."""
    settings = load_settings_or_exit()
    program_slot = resolve_slot(settings, slot)

    with open_manager(settings) as manager:
        try:
            if remap is None:
                ok = manager.add_entry(program_slot, cip_id, ip_address)
            else:
                ok = manager.add_entry_with_remap(
                    program_slot, cip_id, ip_address, remap
                )
        except ValueError as exc:
            raise fail(str(exc)) from exc

    console = Console()
    if not ok:
        console.print(f"[red]✗[/red] Processor rejected peer {cip_id:X} → {ip_address}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Added peer {cip_id:X} → {ip_address}")


def remove(
    cip_id: Annotated[int, typer.Argument(parser=hex_id, help="CIP_ID (hex)")],
    ip_address: Annotated[str, typer.Argument(help="IP address or hostname")],
    slot: SlotOption = None,
) -> None:
    """Remove a peer entry from the IP table."""
    settings = load_settings_or_exit()
    program_slot = resolve_slot(settings, slot)

    with open_manager(settings) as manager:
        try:
            ok = manager.remove_entry(program_slot, cip_id, ip_address)
        except ValueError as exc:
            raise fail(str(exc)) from exc

    console = Console()
    if not ok:
        console.print(f"[yellow]![/yellow] Could not remove peer {cip_id:X} - {ip_address}")
        raise typer.Exit(1)
    console.print(f"[green]✓[/green] Removed peer {cip_id:X} - {ip_address}")


def apply(
    path: Annotated[Path, typer.Argument(help="JSON peer list to apply")],
) -> None:
    """Add every peer listed in a JSON file."""
    try:
        entries = load_entries(path)
    except (FileNotFoundError, ValueError) as exc:
        raise fail(str(exc)) from exc

    settings = load_settings_or_exit()
    with open_manager(settings) as manager:
        try:
            results = manager.apply_entries(entries)
        except ValueError as exc:
            raise fail(str(exc)) from exc

    console = Console()
    for entry, ok in results:
        mark = "[green]✓[/green]" if ok else "[red]✗[/red]"
        console.print(f"{mark} {entry.cip_id:X} → {entry.ip_address}")

    failed = sum(1 for _, ok in results if not ok)
    if failed:
        console.print(f"\n[red]{failed} of {len(results)} entries rejected[/red]")
        raise typer.Exit(1)
    console.print(f"\n[green]Applied {len(results)} entries[/green]")


def register(app: typer.Typer) -> None:
    app.command()(add)
    app.command()(remove)
    app.command()(apply)
