"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from hyperreq.settings import CONFIG_ENV_VAR, ClientSettings, load_settings
from hyperreq.settings.loader import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


def _write_config(root: Path, body: str) -> Path:
    path = root / "hyperreq.toml"
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_without_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    settings = load_settings()

    assert settings == ClientSettings()
    assert settings.timeout == DEFAULT_TIMEOUT
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.verify is True


def test_explicit_path_wins_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
    path = _write_config(tmp_path, '[http]\ntimeout = 2.5\nverify = false\nuser_agent = ""\n')

    settings = load_settings(path)

    assert settings.timeout == 2.5
    assert settings.verify is False
    assert settings.user_agent is None


def test_env_path_is_used(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write_config(tmp_path, '[http]\ntimeout = "off"\n')
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    settings = load_settings()

    assert settings.timeout is None
    assert settings.user_agent == DEFAULT_USER_AGENT


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.toml")


def test_effective_timeout_takes_smallest_bound() -> None:
    assert ClientSettings(timeout=10).effective_timeout(None) == 10
    assert ClientSettings(timeout=10).effective_timeout(2.0) == 2.0
    assert ClientSettings(timeout=None).effective_timeout(3.0) == 3.0
    assert ClientSettings(timeout=None).effective_timeout(None) is None
