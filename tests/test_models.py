"""Tests for IPTableEntry and IPTable."""

from __future__ import annotations

import pytest

from crestron_iptable.models import IPTable, IPTableEntry


def _entry(cip_id: int, ip: str = "10.0.0.1") -> IPTableEntry:
    return IPTableEntry(cip_id=cip_id, ip_address=ip, program_slot=1)


@pytest.fixture
def table() -> IPTable:
    table = IPTable(slot=2)
    for cip_id in (0x03, 0x1A, 0x20):
        table.append(_entry(cip_id), f"{cip_id:X}|row")
    table.raw_header = "CIP_ID |Type"
    table.raw_separator = "------"
    return table


def test_entry_defaults_are_zero_and_empty():
    entry = IPTableEntry()
    assert entry.cip_id == 0
    assert entry.port == 0
    assert entry.device_id == 0
    assert entry.program_slot == 0
    for value in (
        entry.ip_address,
        entry.room_id,
        entry.type,
        entry.status,
        entry.model_name,
        entry.description,
    ):
        assert value == ""


def test_entry_equality_by_value():
    assert _entry(5) == _entry(5)
    assert _entry(5) != _entry(6)


def test_entry_str_lists_every_field():
    entry = IPTableEntry(
        cip_id=0x1A,
        ip_address="10.0.0.5",
        port=41794,
        device_id=0x2B,
        program_slot=3,
        room_id="ROOM01",
        type="Peer",
        status="ONLINE",
        model_name="TSW-1070",
        description="Panel",
    )
    assert str(entry) == (
        "ProgramID - 3, CIP_ID - 1A, IPAddress - '10.0.0.5', Port - 41794, "
        "RoomID - 'ROOM01', DeviceID - 2B, Type - 'Peer', Status - 'ONLINE', "
        "ModelName - 'TSW-1070', Description - 'Panel'"
    )


def test_copy_values_from_copies_all_fields():
    source = IPTableEntry(
        cip_id=7,
        ip_address="host",
        port=1,
        device_id=8,
        program_slot=2,
        room_id="r",
        type="t",
        status="s",
        model_name="m",
        description="d",
    )
    target = IPTableEntry()
    target.copy_values_from(source)
    assert target == source
    assert target is not source


def test_entry_serializes_configuration_fields_only():
    entry = IPTableEntry(
        cip_id=0x1A, ip_address="10.0.0.5", port=41794, status="ONLINE", room_id="R"
    )
    assert entry.model_dump(by_alias=True) == {
        "CIP_ID": 0x1A,
        "IPAddress": "10.0.0.5",
        "Port": 41794,
        "DeviceID": 0,
        "ProgramSlot": 0,
    }


def test_entry_accepts_aliases():
    entry = IPTableEntry.model_validate({"CIP_ID": 3, "IPAddress": "10.0.0.1"})
    assert entry.cip_id == 3
    assert entry.ip_address == "10.0.0.1"


def test_new_table_is_empty():
    table = IPTable(slot=0)
    assert table.slot == 0
    assert table.count == 0
    assert table.entry_count == 0
    assert table.raw_entries == []
    assert table.raw_header == ""


def test_clear_resets_everything(table: IPTable):
    assert table.count == 3

    table.clear()

    assert table.count == 0
    assert table.raw_entries == []
    assert table.raw_header == ""
    assert table.raw_separator == ""
    assert table.slot == 0


def test_clear_on_empty_table():
    table = IPTable()
    table.clear()
    table.clear()
    assert table.count == 0


def test_entry_at_is_one_based(table: IPTable):
    first = table.entry_at(1)
    last = table.entry_at(3)
    assert first is not None and first.cip_id == 0x03
    assert last is not None and last.cip_id == 0x20
    assert table.entry_at(0) is None
    assert table.entry_at(4) is None
    assert table.entry_at(-1) is None


def test_entry_at_returns_copy(table: IPTable):
    entry = table.entry_at(1)
    assert entry is not None
    entry.ip_address = "changed"
    assert table.entries[0].ip_address == "10.0.0.1"


def test_render_lists_entries_without_raw_text(table: IPTable):
    text = table.render()
    lines = text.splitlines()
    assert lines[0] == "IP Table for Slot 2"
    assert len(lines) == 4
    assert lines[1] == str(table.entries[0])
    assert "CIP_ID |Type" not in text
    assert str(table) == text
