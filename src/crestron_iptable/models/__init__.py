"""Data models for IP table entries."""

from crestron_iptable.models.entry import IPTableEntry
from crestron_iptable.models.table import IPTable

__all__ = [
    "IPTable",
    "IPTableEntry",
]
