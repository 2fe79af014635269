from __future__ import annotations

import json
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from crestron_iptable.commands import MAX_PROGRAM_SLOT
from crestron_iptable.console import DEFAULT_PROMPT

from .paths import default_config_path, expand_path

CONFIG_ENV_VAR = "CRESTRON_IPTABLE_CONFIG"

ConsoleBackend = Literal["ssh", "mock"]


class ConsoleConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    backend: ConsoleBackend = "ssh"
    host: str = "192.168.1.10"
    port: int = Field(default=22, ge=1, le=65535)
    username: str = "admin"
    password: str = ""
    timeout: float = Field(default=10.0, gt=0)
    prompt: str = DEFAULT_PROMPT


class DefaultsConfig(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    program_slot: int = Field(default=0, ge=0, le=MAX_PROGRAM_SLOT)


class Settings(BaseModel):
    model_config = {"frozen": True, "extra": "forbid"}

    console: ConsoleConfig = Field(default_factory=ConsoleConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)


def resolve_config_path(allow_missing: bool = False) -> tuple[Path, bool]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = expand_path(env_path)
        if not allow_missing and not path.exists():
            raise FileNotFoundError(f"{CONFIG_ENV_VAR} points to missing file: {path}")
        return path, path.exists()

    path = default_config_path()
    return path, path.exists()


def load_settings(path: Path) -> Settings:
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in config file: {path}\n{exc}") from exc

    try:
        return Settings.model_validate(data or {})
    except ValidationError as exc:
        raise ValueError(f"Invalid config file: {path}\n{exc}") from exc


@lru_cache
def get_settings() -> Settings:
    path, exists = resolve_config_path(allow_missing=False)
    if exists:
        return load_settings(path)
    return Settings()


def _toml_string(value: str) -> str:
    return json.dumps(value)


def render_settings_toml(settings: Settings) -> str:
    console = settings.console
    lines = [
        "# crestron-iptable configuration",
        "",
        "[console]",
        f"backend = {_toml_string(console.backend)}",
        f"host = {_toml_string(console.host)}",
        f"port = {console.port}",
        f"username = {_toml_string(console.username)}",
        f"password = {_toml_string(console.password)}",
        f"timeout = {console.timeout}",
        f"prompt = {_toml_string(console.prompt)}",
        "",
        "[defaults]",
        f"program_slot = {settings.defaults.program_slot}",
        "",
    ]
    return "\n".join(lines)


def write_settings(settings: Settings, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_settings_toml(settings))
