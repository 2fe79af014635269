"""Tests for settings loading."""

from __future__ import annotations

import pytest

from crestron_iptable.config import (
    ConsoleConfig,
    DefaultsConfig,
    Settings,
    get_settings,
    load_settings,
    resolve_config_path,
    write_settings,
)


def test_config_roundtrip(tmp_path):
    path = tmp_path / "config.toml"
    settings = Settings(
        console=ConsoleConfig(host="cp4.local", username="tech", backend="mock"),
        defaults=DefaultsConfig(program_slot=2),
    )
    write_settings(settings, path)

    loaded = load_settings(path)
    assert loaded == settings
    assert loaded.console.prompt == settings.console.prompt


def test_invalid_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[console\n")
    with pytest.raises(ValueError, match="Invalid TOML"):
        load_settings(path)


def test_invalid_slot_default(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[defaults]\nprogram_slot = 11\n")
    with pytest.raises(ValueError, match="Invalid config file"):
        load_settings(path)


def test_env_var_points_to_missing_file(tmp_path, monkeypatch):
    monkeypatch.setenv("CRESTRON_IPTABLE_CONFIG", str(tmp_path / "nope.toml"))
    with pytest.raises(FileNotFoundError):
        resolve_config_path()

    path, exists = resolve_config_path(allow_missing=True)
    assert path == tmp_path / "nope.toml"
    assert exists is False


def test_get_settings_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    settings = get_settings()
    assert settings.console.backend == "ssh"
    assert settings.console.port == 22
    assert settings.defaults.program_slot == 0
