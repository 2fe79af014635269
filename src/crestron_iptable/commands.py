"""Console command strings and response markers for the processor IP table."""

from __future__ import annotations

COMMAND_LIST_IPTABLE_TABULAR = "iptable -t"
COMMAND_ADD_PEER = "addpeer"
COMMAND_REMOVE_PEER = "rempeer"

RESPONSE_ERROR = "bad or incomplete command"
RESPONSE_TABLE_START = "tablestart:"
RESPONSE_MASTER_LIST_SET = "master list set"
RESPONSE_REMOVE_FAILED = "unable to remove ip table entry"

MAX_PROGRAM_SLOT = 10


def _slot_flag(slot: int) -> str:
    return f" -p:{slot}" if slot != 0 else ""


def query_command(slot: int) -> str:
    return f"{COMMAND_LIST_IPTABLE_TABULAR}{_slot_flag(slot)}"


def add_peer_command(
    cip_id: int, ip_address: str, slot: int, device_id: int | None = None
) -> str:
    command = f"{COMMAND_ADD_PEER} {cip_id:X} {ip_address}"
    if device_id is not None:
        command += f" -D:{device_id:X}"
    return command + _slot_flag(slot)


def remove_peer_command(cip_id: int, ip_address: str, slot: int) -> str:
    return f"{COMMAND_REMOVE_PEER} {cip_id:X} {ip_address}{_slot_flag(slot)}"


def _contains(response: str | None, marker: str) -> bool:
    return response is not None and marker in response.lower()


def is_error_response(response: str | None) -> bool:
    return not response or _contains(response, RESPONSE_ERROR)


def has_table_start(response: str | None) -> bool:
    return _contains(response, RESPONSE_TABLE_START)


def is_master_list_set(response: str | None) -> bool:
    return _contains(response, RESPONSE_MASTER_LIST_SET)


def is_remove_failure(response: str | None) -> bool:
    return _contains(response, RESPONSE_REMOVE_FAILED)
