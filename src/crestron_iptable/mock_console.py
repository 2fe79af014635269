from __future__ import annotations

import logging
from dataclasses import dataclass, field

from crestron_iptable.models import IPTableEntry
from crestron_iptable.parsing import parse_hex_u16

logger = logging.getLogger(__name__)

HEADER = (
    "CIP_ID  |Type    |Status    |DevID   |Port   |IP Address/SiteName       "
    "|Model Name          |Description         |RoomId"
)
SEPARATOR = "-" * len(HEADER)

DEFAULT_PORT = 41794
RUNNING_SLOT = 1


def _format_row(entry: IPTableEntry) -> str:
    return (
        f"{entry.cip_id:>6X}  |{entry.type:<8}|{entry.status:<10}"
        f"|{entry.device_id:>6X}  |{entry.port:<7}|{entry.ip_address:<26}"
        f"|{entry.model_name:<20}|{entry.description:<20}|{entry.room_id}"
    )


def _split_options(tokens: list[str]) -> tuple[list[str], dict[str, str]]:
    args: list[str] = []
    options: dict[str, str] = {}
    for token in tokens:
        if token.startswith("-") and ":" in token:
            flag, _, value = token.partition(":")
            options[flag[1:]] = value
        else:
            args.append(token)
    return args, options


@dataclass
class MockConsole:
    """In-memory processor console answering the IP table commands.

    Useful for development without hardware. Peers added without ``-p:`` go
    to the running program in slot 1, as on a processor.
    """

    entries: list[IPTableEntry] = field(default_factory=list)
    commands: list[str] = field(default_factory=list, repr=False)

    def send(self, command: str) -> str:
        self.commands.append(command)
        logger.debug("Mock console received '%s'", command)

        verb, *tokens = command.split() or [""]
        args, options = _split_options(tokens)
        try:
            slot = int(options.get("p", "0"))
        except ValueError:
            return "Bad or Incomplete Command\r\n"

        if verb == "iptable" and "-t" in args:
            return self._list(slot)
        if verb == "addpeer" and len(args) == 2:
            return self._add(args, options, slot or RUNNING_SLOT)
        if verb == "rempeer" and len(args) == 2:
            return self._remove(args, slot or RUNNING_SLOT)
        return "Bad or Incomplete Command\r\n"

    def _list(self, slot: int) -> str:
        rows = [
            _format_row(entry)
            for entry in self.entries
            if slot == 0 or entry.program_slot == slot
        ]
        return "\r\n".join(["TableStart:", HEADER, SEPARATOR, *rows, ""])

    def _add(self, args: list[str], options: dict[str, str], slot: int) -> str:
        cip_id = parse_hex_u16(args[0])
        if cip_id == 0:
            return "Bad or Incomplete Command\r\n"
        device_id = parse_hex_u16(options["D"]) if "D" in options else cip_id
        self.entries = [
            entry
            for entry in self.entries
            if not (entry.cip_id == cip_id and entry.program_slot == slot)
        ]
        self.entries.append(
            IPTableEntry(
                cip_id=cip_id,
                ip_address=args[1],
                port=DEFAULT_PORT,
                device_id=device_id,
                program_slot=slot,
                type="Peer",
                status="OFFLINE",
            )
        )
        return "Master List set.\r\n"

    def _remove(self, args: list[str], slot: int) -> str:
        cip_id = parse_hex_u16(args[0])
        remaining = [
            entry
            for entry in self.entries
            if not (
                entry.cip_id == cip_id
                and entry.ip_address == args[1]
                and entry.program_slot == slot
            )
        ]
        if len(remaining) == len(self.entries):
            return "Unable to remove IP Table entry\r\n"
        self.entries = remaining
        return "Master List set.\r\n"

    @classmethod
    def with_sample_entries(cls) -> MockConsole:
        return cls(
            entries=[
                IPTableEntry(
                    cip_id=0x03,
                    ip_address="10.0.0.20",
                    port=DEFAULT_PORT,
                    device_id=0x03,
                    program_slot=1,
                    type="Gway",
                    status="ONLINE",
                    model_name="DIN-AP3",
                    description="Lobby gateway",
                ),
                IPTableEntry(
                    cip_id=0x1A,
                    ip_address="touchpanel-boardroom",
                    port=DEFAULT_PORT,
                    device_id=0x1A,
                    program_slot=1,
                    type="Peer",
                    status="OFFLINE",
                    model_name="TSW-1070",
                    description="Boardroom panel",
                ),
            ]
        )
