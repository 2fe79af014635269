"""Read and write peer lists as JSON files."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from crestron_iptable.models import IPTableEntry

_ENTRIES = TypeAdapter(list[IPTableEntry])

# Descriptive fields only come from processor output, never from a peer list.
_PERSISTED_KEYS = {
    key
    for name, info in IPTableEntry.model_fields.items()
    if not info.exclude
    for key in (name, info.alias)
    if key
}


def _persisted_fields(item: object) -> object:
    if not isinstance(item, dict):
        return item
    return {key: value for key, value in item.items() if key in _PERSISTED_KEYS}


def dump_entries(entries: list[IPTableEntry]) -> str:
    return json.dumps(
        _ENTRIES.dump_python(entries, mode="json", by_alias=True), indent=2
    )


def save_entries(entries: list[IPTableEntry], path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_entries(entries) + "\n")


def load_entries(path: Path) -> list[IPTableEntry]:
    if not path.exists():
        raise FileNotFoundError(f"Entries file not found: {path}")

    try:
        with path.open("r") as handle:
            data = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in entries file: {path}\n{exc}") from exc

    try:
        if isinstance(data, list):
            data = [_persisted_fields(item) for item in data]
        return _ENTRIES.validate_python(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid entries file: {path}\n{exc}") from exc
