"""Tests for the layered client configuration."""
from __future__ import annotations

import json

from simplechat.config import DEFAULTS, get_client_config, reset_config_cache
from simplechat.config.env import is_placeholder


def test_defaults_without_any_source():
    cfg = get_client_config()
    assert cfg["base_url"] == "https://api.openai.com"  # nosec B101
    assert cfg["api_version"] == "v1"  # nosec B101
    assert cfg["chat_model"] == "gpt-4"  # nosec B101
    assert cfg["completion_model"] == "text-davinci-003"  # nosec B101
    assert cfg["embeddings_model"] == "text-embedding-ada-002"  # nosec B101
    assert cfg["moderation_model"] == "text-moderation-latest"  # nosec B101
    assert "api_key" not in cfg  # nosec B101


def test_merge_order_file_then_env_then_overrides(monkeypatch, tmp_path):
    path = tmp_path / "client.json"
    path.write_text(json.dumps({"openai": {"chat_model": "from-file", "api_version": "v9", "unrelated": 1}}))
    monkeypatch.setenv("SIMPLECHAT_CONFIG_FILE", str(path))
    monkeypatch.setenv("OPENAI_API_VERSION", "v2")
    reset_config_cache()

    cfg = get_client_config({"api_version": None, "base_url": "http://override"})

    assert cfg["chat_model"] == "from-file"  # nosec B101
    assert cfg["api_version"] == "v2"  # nosec B101
    assert cfg["base_url"] == "http://override"  # nosec B101
    assert "unrelated" not in cfg  # nosec B101


def test_yaml_config_file(monkeypatch, tmp_path):
    path = tmp_path / "client.yaml"
    path.write_text("completion_model: davinci-yaml\nmoderation_model: mod-yaml\n")
    monkeypatch.setenv("SIMPLECHAT_CONFIG_FILE", str(path))
    reset_config_cache()

    cfg = get_client_config()

    assert cfg["completion_model"] == "davinci-yaml"  # nosec B101
    assert cfg["moderation_model"] == "mod-yaml"  # nosec B101


def test_dotenv_fills_missing_values(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text('# local settings\nOPENAI_API_KEY="sk-live-from-dotenv"\nOPENAI_CHAT_MODEL=gpt-dotenv\n')
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    monkeypatch.setenv("OPENAI_CHAT_MODEL", "gpt-explicit")
    # The loader writes os.environ directly; register the key so it is restored.
    monkeypatch.setenv("OPENAI_API_KEY", "")
    monkeypatch.delenv("OPENAI_API_KEY")
    reset_config_cache()

    cfg = get_client_config()

    assert cfg["api_key"] == "sk-live-from-dotenv"  # nosec B101
    assert cfg["chat_model"] == "gpt-explicit"  # nosec B101


def test_placeholder_keys_are_dropped(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "your_openai_key")
    assert "api_key" not in get_client_config()  # nosec B101


def test_is_placeholder_heuristics():
    assert is_placeholder("placeholder-value")  # nosec B101
    assert is_placeholder("ChangeMe123")  # nosec B101
    assert is_placeholder("<<YOUR_OPENAI_KEY_HERE>>")  # nosec B101
    assert is_placeholder("test_token")  # nosec B101
    assert is_placeholder("   ")  # nosec B101
    assert not is_placeholder("sk-real-value")  # nosec B101
    assert not is_placeholder(None)  # nosec B101


def test_defaults_mapping_is_not_mutated_by_overrides():
    get_client_config({"chat_model": "other"})
    assert DEFAULTS["chat_model"] == "gpt-4"  # nosec B101
