"""crestron-iptable - read and edit a control processor's IP table over its console."""

from __future__ import annotations

from importlib.metadata import version

from .console import ConsoleTransport, SSHConsole
from .manager import IPTableManager
from .mock_console import MockConsole
from .models import IPTable, IPTableEntry

__all__ = [
    "ConsoleTransport",
    "IPTable",
    "IPTableEntry",
    "IPTableManager",
    "MockConsole",
    "SSHConsole",
    "__version__",
]

__version__ = version("crestron-iptable")
