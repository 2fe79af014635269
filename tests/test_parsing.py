"""Tests for the tabular response parser."""

from __future__ import annotations

import logging

import pytest

from crestron_iptable import parsing
from crestron_iptable.models import IPTable


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1A", 26),
        (" 1a ", 26),
        ("FFFF", 0xFFFF),
        ("ZZ", 0),
        ("", 0),
        ("0x1A", 0),
        ("10000", 0),
        (None, 0),
    ],
)
def test_parse_hex_u16(text, expected):
    assert parsing.parse_hex_u16(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [("41794", 41794), (" 80 ", 80), ("65536", 0), ("-1", 0), ("1A", 0), (None, 0)],
)
def test_parse_decimal_u16(text, expected):
    assert parsing.parse_decimal_u16(text) == expected


def test_trim_field():
    assert parsing.trim_field("  Peer ") == "Peer"
    assert parsing.trim_field(None) == ""


def test_parse_row_maps_columns():
    entry = parsing.parse_row(
        "1A|Peer |ONLINE |2B |41794 |10.0.0.5 |TSW-1070 |Panel |ROOM01", slot=4
    )
    assert entry is not None
    assert entry.cip_id == 0x1A
    assert entry.type == "Peer"
    assert entry.status == "ONLINE"
    assert entry.device_id == 0x2B
    assert entry.port == 41794
    assert entry.ip_address == "10.0.0.5"
    assert entry.model_name == "TSW-1070"
    assert entry.description == "Panel"
    assert entry.room_id == "ROOM01"
    assert entry.program_slot == 4


@pytest.mark.parametrize("columns", [8, 10])
def test_parse_row_rejects_wrong_column_count(columns):
    line = "|".join(["1"] * columns)
    assert parsing.parse_row(line, slot=1) is None


def test_parse_table_response(table_response):
    table = IPTable()
    parsing.parse_table_response(table_response, 1, table)

    assert table.slot == 0
    assert table.count == 2
    assert len(table.raw_entries) == 2
    assert table.raw_header.startswith("CIP_ID")
    assert table.raw_separator.startswith("---")
    assert table.raw_entries[1].startswith("1A")
    assert [entry.cip_id for entry in table.entries] == [0x03, 0x1A]
    assert table.entries[1].ip_address == "touchpanel-boardroom"
    assert table.entries[1].room_id == "ROOM01"
    assert table.entries[0].room_id == ""


def test_parse_keeps_rows_with_bad_fields():
    response = "TableStart:\nCIP_ID|a\n---\nZZ|Peer|ONLINE|1|80|h|m|d|r\n"
    table = IPTable()
    parsing.parse_table_response(response, 2, table)

    assert table.count == 1
    assert table.entries[0].cip_id == 0


def test_parse_skips_malformed_rows_and_stray_text():
    response = "\n".join(
        [
            "TableStart:",
            "banner text",
            "",
            "1|Peer|ONLINE|1|80|h|m|d",
            "2|Peer|ONLINE|2|80|h|m|d|r|extra",
            "3|Peer|ONLINE|3|80|h|m|d|r",
        ]
    )
    table = IPTable()
    parsing.parse_table_response(response, 0, table)

    assert [entry.cip_id for entry in table.entries] == [3]
    assert table.raw_entries == ["3|Peer|ONLINE|3|80|h|m|d|r"]


def test_parse_replaces_previous_contents(table_response):
    table = IPTable(slot=5)
    parsing.parse_table_response(table_response, 1, table)
    parsing.parse_table_response(table_response, 1, table)
    assert table.count == 2


def test_parse_header_snapshot_follows_last_parsed_row():
    response = "\n".join(
        [
            "TableStart:",
            "CIP_ID first",
            "1|a|b|1|80|h|m|d|r",
            "CIP_ID second",
        ]
    )
    table = IPTable()
    parsing.parse_table_response(response, 1, table)
    assert table.raw_header == "CIP_ID first"


def test_parse_short_response_warns(caplog):
    table = IPTable()
    with caplog.at_level(logging.WARNING, logger="crestron_iptable.parsing"):
        parsing.parse_table_response("TableStart:", 3, table)

    assert table.count == 0
    assert table.slot == 0
    assert "Invalid response" in caplog.text


def test_parse_error_keeps_partial_rows(monkeypatch, caplog):
    real_parse_row = parsing.parse_row

    def _flaky(line: str, slot: int):
        if line.startswith("2"):
            raise RuntimeError("boom")
        return real_parse_row(line, slot)

    monkeypatch.setattr(parsing, "parse_row", _flaky)
    response = "\n".join(
        [
            "TableStart:",
            "1|a|b|1|80|h|m|d|r",
            "2|a|b|2|80|h|m|d|r",
            "3|a|b|3|80|h|m|d|r",
        ]
    )
    table = IPTable()
    with caplog.at_level(logging.ERROR, logger="crestron_iptable.parsing"):
        parsing.parse_table_response(response, 1, table)

    assert [entry.cip_id for entry in table.entries] == [1]
    assert len(table.raw_entries) == 1
    assert "Error parsing IP table for slot 1" in caplog.text
