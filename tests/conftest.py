from __future__ import annotations

import pytest

from crestron_iptable.config import get_settings

TABLE_RESPONSE = """\
iptable -t -p:1
TableStart:
CIP_ID  |Type    |Status    |DevID   |Port   |IP Address/SiteName       |Model Name          |Description         |RoomId
---------------------------------------------------------------------------------------------------------------------------
     3  |Gway    |ONLINE    |     3  |41794  |10.0.0.20                 |DIN-AP3             |Lobby gateway       |
    1A  |Peer    |OFFLINE   |    1A  |41794  |touchpanel-boardroom      |TSW-1070            |Boardroom panel     |ROOM01
"""


class RecordingConsole:
    """Console stub returning canned responses and recording every command."""

    def __init__(self, *responses: str) -> None:
        self.responses = list(responses)
        self.commands: list[str] = []

    def send(self, command: str) -> str:
        self.commands.append(command)
        if not self.responses:
            return ""
        if len(self.responses) == 1:
            return self.responses[0]
        return self.responses.pop(0)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("CRESTRON_IPTABLE_CONFIG", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def table_response() -> str:
    return TABLE_RESPONSE


@pytest.fixture
def make_console():
    return RecordingConsole
