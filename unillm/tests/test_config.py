"""Layered provider configuration: defaults, file, environment, overrides."""
from __future__ import annotations

import json

from unillm.config import DEFAULTS, get_model, get_provider_config
from unillm.config.env import get_env_var_candidates, is_placeholder, resolve_provider_key


def test_defaults_apply_without_file_or_env():
    cfg = get_provider_config("ollama")
    assert cfg == DEFAULTS["ollama"]  # nosec B101 - pytest assert in tests


def test_yaml_file_then_env_then_overrides(tmp_path, monkeypatch):
    path = tmp_path / "unillm.yaml"
    path.write_text("ollama:\n  host: http://file:11434\n  allowed_models: [phi4]\n", encoding="utf-8")
    monkeypatch.setenv("UNILLM_CONFIG_FILE", str(path))

    assert get_provider_config("ollama")["host"] == "http://file:11434"  # nosec B101 - pytest assert in tests
    assert get_provider_config("ollama")["allowed_models"] == ["phi4"]  # nosec B101 - pytest assert in tests

    monkeypatch.setenv("OLLAMA_HOST", "http://env:11434")
    assert get_provider_config("ollama")["host"] == "http://env:11434"  # nosec B101 - pytest assert in tests
    assert get_provider_config("ollama", {"host": "http://code:11434"})["host"] == "http://code:11434"  # nosec B101 - pytest assert in tests
    assert get_provider_config("ollama", {"host": None})["host"] == "http://env:11434"  # nosec B101 - pytest assert in tests


def test_json_file_is_read(tmp_path, monkeypatch):
    path = tmp_path / "unillm.json"
    path.write_text(json.dumps({"openai": {"model": "gpt-4o-mini"}}), encoding="utf-8")
    monkeypatch.setenv("UNILLM_CONFIG_FILE", str(path))
    assert get_model("openai") == "gpt-4o-mini"  # nosec B101 - pytest assert in tests


def test_missing_file_is_ignored(tmp_path, monkeypatch):
    monkeypatch.setenv("UNILLM_CONFIG_FILE", str(tmp_path / "absent.yaml"))
    assert get_provider_config("gemini") == DEFAULTS["gemini"]  # nosec B101 - pytest assert in tests


def test_key_aliases_in_priority_order(monkeypatch):
    assert list(get_env_var_candidates("gemini")) == ["GEMINI_API_KEY", "GOOGLE_API_KEY"]  # nosec B101 - pytest assert in tests
    monkeypatch.setenv("GOOGLE_API_KEY", "from-google")
    assert resolve_provider_key("gemini") == ("from-google", "GOOGLE_API_KEY")  # nosec B101 - pytest assert in tests
    monkeypatch.setenv("GEMINI_API_KEY", "from-gemini")
    assert resolve_provider_key("gemini") == ("from-gemini", "GEMINI_API_KEY")  # nosec B101 - pytest assert in tests


def test_placeholders_never_win(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "your-key-placeholder")
    monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant-real")
    assert is_placeholder("test_key") and not is_placeholder(None)  # nosec B101 - pytest assert in tests
    assert get_provider_config("anthropic")["api_key"] == "sk-ant-real"  # nosec B101 - pytest assert in tests


def test_unknown_provider_has_no_key():
    assert resolve_provider_key("nope") == (None, None)  # nosec B101 - pytest assert in tests
