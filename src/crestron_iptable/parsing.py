"""Parser for the processor's tabular ``iptable -t`` output.

A response looks like::

    TableStart:
    CIP_ID  |Type    |Status    |DevID   |Port   |IP Address/SiteName |Model Name |Description |RoomId
    ---------------------------------------------------------------------------------------------------
       3    |Gway    |ONLINE    |   3    |41794  |10.0.0.20           |DIN-AP3    |Lobby       |

Field helpers never raise: malformed numbers become 0 and missing text
becomes an empty string, so one bad cell never drops a row.
"""

from __future__ import annotations

import logging
import re

from crestron_iptable.models import IPTable, IPTableEntry

logger = logging.getLogger(__name__)

HEADER_TOKEN = "CIP_ID"
SEPARATOR_PREFIX = "-"
COLUMN_DELIMITER = "|"
COLUMN_COUNT = 9

U16_MAX = 0xFFFF

HEX_RE = re.compile(r"[0-9A-Fa-f]+")
_DECIMAL_RE = re.compile(r"\+?[0-9]+")


def _parse_u16(value: str | None, pattern: re.Pattern[str], base: int) -> int:
    if value is None:
        return 0
    text = value.strip()
    if not pattern.fullmatch(text):
        return 0
    number = int(text, base)
    return number if number <= U16_MAX else 0


def parse_hex_u16(value: str | None) -> int:
    return _parse_u16(value, HEX_RE, 16)


def parse_decimal_u16(value: str | None) -> int:
    return _parse_u16(value, _DECIMAL_RE, 10)


def trim_field(value: str | None) -> str:
    return value.strip() if value is not None else ""


def parse_row(line: str, slot: int) -> IPTableEntry | None:
    """Build an entry from one pipe-delimited row, or None if it is not 9 columns wide."""
    columns = line.split(COLUMN_DELIMITER)
    if len(columns) != COLUMN_COUNT:
        logger.debug("Skipping row with %d columns: %r", len(columns), line)
        return None

    return IPTableEntry(
        program_slot=slot,
        cip_id=parse_hex_u16(columns[0]),
        type=trim_field(columns[1]),
        status=trim_field(columns[2]),
        device_id=parse_hex_u16(columns[3]),
        port=parse_decimal_u16(columns[4]),
        ip_address=trim_field(columns[5]),
        model_name=trim_field(columns[6]),
        description=trim_field(columns[7]),
        room_id=trim_field(columns[8]),
    )


def parse_table_response(response: str, slot: int, table: IPTable) -> None:
    """Fill ``table`` from a tabular response.

    The table is stamped with ``slot`` and then cleared, which leaves its slot
    at 0 as on the processor client; each entry carries ``slot`` instead. An
    unexpected error stops the loop but keeps the rows parsed so far.
    """
    table.slot = slot
    table.clear()

    lines = response.strip().split("\n")
    if len(lines) < 2:
        logger.warning("Invalid response loading IP table - %r", response)
        return

    logger.debug("Parsing %d lines of IP table data for slot %d", len(lines), slot)

    header = ""
    separator = ""
    try:
        for line in lines:
            row = line.strip()
            if row.startswith(HEADER_TOKEN):
                header = row
            elif row.startswith(SEPARATOR_PREFIX):
                separator = row
            elif COLUMN_DELIMITER in row:
                entry = parse_row(row, slot)
                if entry is None:
                    continue
                table.append(entry, row)
                table.raw_header = header
                table.raw_separator = separator
    except Exception:
        logger.exception("Error parsing IP table for slot %d", slot)
