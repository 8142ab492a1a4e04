"""Tests for runtime location and environment settings."""

from pathlib import Path
from unittest.mock import patch

from timejoy.core import runtime


def test_configured_home_wins(temp_dir, monkeypatch):
    monkeypatch.setenv("TIMEJOY_HOME", str(temp_dir / "custom"))
    assert runtime.resolve_runtime_home() == temp_dir / "custom"
    assert (temp_dir / "custom").is_dir()


def test_falls_back_when_home_unwritable(temp_dir, monkeypatch):
    monkeypatch.setenv("TIMEJOY_HOME", str(temp_dir / "locked"))
    fallback = temp_dir / "fallback"
    with patch.object(runtime, "_home_candidates", return_value=[temp_dir / "locked", fallback]), \
         patch.object(runtime, "_usable", side_effect=lambda d: d == fallback):
        assert runtime.resolve_runtime_home() == fallback


def test_state_path_uses_base_dir(temp_dir):
    assert runtime.state_path(temp_dir / "data") == temp_dir / "data" / "state.json"
    assert (temp_dir / "data").is_dir()


def test_home_candidates_order(monkeypatch):
    monkeypatch.delenv("TIMEJOY_HOME", raising=False)
    candidates = runtime._home_candidates()
    assert candidates[0] == Path.home() / ".timejoy"
    assert candidates[-1].name == "timejoy-runtime"


def test_reflection_cli(monkeypatch):
    monkeypatch.delenv("TIMEJOY_GEMINI_CLI", raising=False)
    assert runtime.reflection_cli() == "gemini"
    monkeypatch.setenv("TIMEJOY_GEMINI_CLI", "  /opt/gemini ")
    assert runtime.reflection_cli() == "/opt/gemini"
