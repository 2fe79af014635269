"""Transports for the processor's text console."""

from __future__ import annotations

import codecs
import logging
import re
import time
from typing import Protocol

import paramiko

logger = logging.getLogger(__name__)

DEFAULT_PROMPT = r"[\w.-]+>\s*$"
READ_CHUNK = 4096
POLL_INTERVAL = 0.05


class ConsoleTransport(Protocol):
    def send(self, command: str) -> str: ...


class SSHConsole:
    """Synchronous console session over SSH.

    Each ``send`` writes one command and reads until the console prompt comes
    back or ``timeout`` elapses. Errors while sending are logged and reported
    as an empty response.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str | None = None,
        port: int = 22,
        timeout: float = 10.0,
        prompt: str = DEFAULT_PROMPT,
    ) -> None:
        self.host = host
        self.username = username
        self.password = password
        self.port = port
        self.timeout = timeout
        self._prompt = re.compile(prompt)
        self._client: paramiko.SSHClient | None = None
        self._channel: paramiko.Channel | None = None

    def connect(self) -> None:
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        use_keys = not self.password
        try:
            client.connect(
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password or None,
                timeout=self.timeout,
                look_for_keys=use_keys,
                allow_agent=use_keys,
            )
            channel = client.invoke_shell()
        except (paramiko.SSHException, OSError) as exc:
            client.close()
            raise ConnectionError(
                f"Could not connect to {self.host}:{self.port}: {exc}"
            ) from exc

        channel.settimeout(self.timeout)
        self._client = client
        self._channel = channel
        banner = self._read_until_prompt()
        logger.debug("Connected to %s, banner: %r", self.host, banner)

    def close(self) -> None:
        if self._channel is not None:
            self._channel.close()
            self._channel = None
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> SSHConsole:
        self.connect()
        return self

    def __exit__(self, *_exc: object) -> None:
        self.close()

    def send(self, command: str) -> str:
        if self._channel is None:
            raise RuntimeError("SSH console not connected. Call connect() first.")
        try:
            self._channel.send((command + "\r\n").encode())
            output = self._read_until_prompt()
        except (paramiko.SSHException, OSError) as exc:
            logger.error("Error executing command '%s' on %s: %s", command, self.host, exc)
            return ""
        return _strip_echo(output, command)

    def _read_until_prompt(self) -> str:
        assert self._channel is not None
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        buffer = ""
        deadline = time.monotonic() + self.timeout
        while time.monotonic() < deadline:
            if self._channel.recv_ready():
                chunk = self._channel.recv(READ_CHUNK)
                if not chunk:
                    break
                buffer += decoder.decode(chunk)
                match = self._prompt.search(buffer)
                if match:
                    return buffer[: match.start()]
            elif self._channel.exit_status_ready():
                break
            else:
                time.sleep(POLL_INTERVAL)
        buffer += decoder.decode(b"", final=True)
        logger.debug("No prompt from %s within %.1fs", self.host, self.timeout)
        return buffer


def _strip_echo(output: str, command: str) -> str:
    first, _, rest = output.partition("\n")
    if first.strip() == command.strip():
        return rest
    return output
