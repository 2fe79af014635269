from __future__ import annotations

from pydantic import BaseModel, Field

from crestron_iptable.models.entry import IPTableEntry


class IPTable(BaseModel):
    """IP table entries for one program slot.

    ``entries`` and ``raw_entries`` are kept in lockstep: ``raw_entries[i]`` is
    the trimmed processor row that ``entries[i]`` was parsed from.
    """

    slot: int = 0
    entries: list[IPTableEntry] = Field(default_factory=list)
    raw_entries: list[str] = Field(default_factory=list)
    raw_header: str = ""
    raw_separator: str = ""

    @property
    def count(self) -> int:
        return len(self.entries)

    @property
    def entry_count(self) -> int:
        return self.count

    def append(self, entry: IPTableEntry, raw_row: str) -> None:
        self.entries.append(entry)
        self.raw_entries.append(raw_row)

    def clear(self) -> None:
        self.entries.clear()
        self.raw_entries.clear()
        self.raw_header = ""
        self.raw_separator = ""
        self.slot = 0

    def entry_at(self, index: int) -> IPTableEntry | None:
        """Return a copy of the entry at a 1-based ``index``, or None if out of range."""
        if 0 < index <= len(self.entries):
            return self.entries[index - 1].model_copy()
        return None

    def render(self) -> str:
        lines = [f"IP Table for Slot {self.slot}"]
        lines.extend(str(entry) for entry in self.entries)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()
