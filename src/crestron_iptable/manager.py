from __future__ import annotations

import logging
from collections.abc import Iterable

from crestron_iptable.commands import (
    MAX_PROGRAM_SLOT,
    add_peer_command,
    has_table_start,
    is_error_response,
    is_master_list_set,
    is_remove_failure,
    query_command,
    remove_peer_command,
)
from crestron_iptable.console import ConsoleTransport
from crestron_iptable.models import IPTable, IPTableEntry
from crestron_iptable.parsing import U16_MAX, parse_table_response

logger = logging.getLogger(__name__)


def _is_valid_program_slot(slot: int) -> bool:
    return 0 <= slot <= MAX_PROGRAM_SLOT


def _is_valid_id(value: int) -> bool:
    return 0 < value <= U16_MAX


def _is_valid_address(ip_address: str | None) -> bool:
    return ip_address is not None and len(ip_address.strip()) > 0


class IPTableManager:
    """Reads and edits the processor IP table through its console.

    The manager keeps no state between calls. Callers that share an
    ``IPTable`` between threads must serialize access to it themselves.
    """

    def __init__(self, console: ConsoleTransport) -> None:
        self._console = console

    def _send(self, command: str) -> str:
        logger.debug("Sending command '%s'", command)
        response = self._console.send(command)
        logger.debug("Response to '%s': %r", command, response)
        return response

    def load_table(self, program_slot: int, table: IPTable | None) -> bool:
        """Load the IP table for ``program_slot`` (0 loads every slot) into ``table``.

        Returns False, leaving ``table`` untouched, when the processor reports an
        error or returns no table. Once the table marker is seen the result is
        True even if parsing stops early.
        """
        if table is None:
            raise ValueError("IPTable is None")
        if not _is_valid_program_slot(program_slot):
            raise ValueError(f"Invalid slot # {program_slot}")

        response = self._send(query_command(program_slot))

        if is_error_response(response):
            logger.info("No IP table loaded for slot %d", program_slot)
            return False

        if not has_table_start(response):
            return False

        parse_table_response(response, program_slot, table)
        return True

    def _check_mutation_args(
        self, program_slot: int, cip_id: int, ip_address: str | None
    ) -> None:
        if not (
            _is_valid_program_slot(program_slot)
            and _is_valid_id(cip_id)
            and _is_valid_address(ip_address)
        ):
            raise ValueError(
                "Cannot change IP table entry - invalid slot, CIP_ID or address"
            )

    def add_entry(self, program_slot: int, cip_id: int, ip_address: str) -> bool:
        """Add a peer for ``cip_id`` at ``ip_address`` to the program in ``program_slot``."""
        self._check_mutation_args(program_slot, cip_id, ip_address)

        response = self._send(add_peer_command(cip_id, ip_address, program_slot))
        return is_master_list_set(response)

    def add_entry_with_remap(
        self, program_slot: int, cip_id: int, ip_address: str, device_id: int
    ) -> bool:
        """Add a peer that remaps the programmed ``device_id`` to ``cip_id`` at runtime."""
        self._check_mutation_args(program_slot, cip_id, ip_address)
        if not _is_valid_id(device_id):
            raise ValueError(
                f"Cannot change IP table entry - invalid device ID {device_id}"
            )

        response = self._send(
            add_peer_command(cip_id, ip_address, program_slot, device_id=device_id)
        )
        return is_master_list_set(response)

    def remove_entry(self, program_slot: int, cip_id: int, ip_address: str) -> bool:
        self._check_mutation_args(program_slot, cip_id, ip_address)

        response = self._send(remove_peer_command(cip_id, ip_address, program_slot))
        if is_master_list_set(response):
            return True
        if is_remove_failure(response):
            logger.warning(
                "Could not remove IP table entry %X - %s", cip_id, ip_address
            )
        return False

    def entry_exists(
        self, program_slot: int, cip_id: int, into: IPTableEntry | None = None
    ) -> bool:
        """Query the processor and report whether ``cip_id`` is in the slot's table.

        When found and ``into`` is given, the entry's values are copied into it.
        """
        table = IPTable(slot=program_slot)
        if not self.load_table(program_slot, table):
            return False
        return self.entry_exists_in_table(table, cip_id, into)

    def entry_exists_in_table(
        self, table: IPTable | None, cip_id: int, into: IPTableEntry | None = None
    ) -> bool:
        if table is None or table.count == 0:
            logger.debug("IP table is empty, CIP_ID %X not found", cip_id)
            return False

        for entry in table.entries:
            if entry.cip_id == cip_id:
                if into is not None:
                    into.copy_values_from(entry)
                return True
        return False

    def load_entry_from_processor(
        self, program_slot: int, cip_id: int, into: IPTableEntry
    ) -> bool:
        return self.entry_exists(program_slot, cip_id, into)

    def find_entry(self, table: IPTable, cip_id: int) -> IPTableEntry | None:
        found = IPTableEntry()
        if self.entry_exists_in_table(table, cip_id, found):
            return found
        return None

    def apply_entries(
        self, entries: Iterable[IPTableEntry]
    ) -> list[tuple[IPTableEntry, bool]]:
        """Add each entry as a peer, remapping those with a device ID.

        Every entry is validated before any command is sent.
        """
        pending = list(entries)
        for entry in pending:
            self._check_mutation_args(entry.program_slot, entry.cip_id, entry.ip_address)
            if entry.device_id and not _is_valid_id(entry.device_id):
                raise ValueError(
                    f"Cannot change IP table entry - invalid device ID {entry.device_id}"
                )

        results: list[tuple[IPTableEntry, bool]] = []
        for entry in pending:
            if entry.device_id:
                ok = self.add_entry_with_remap(
                    entry.program_slot, entry.cip_id, entry.ip_address, entry.device_id
                )
            else:
                ok = self.add_entry(entry.program_slot, entry.cip_id, entry.ip_address)
            if not ok:
                logger.warning("Processor did not accept entry: %s", entry)
            results.append((entry, ok))
        return results
