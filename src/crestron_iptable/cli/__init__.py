from crestron_iptable.cli.app import app

__all__ = ["app"]
