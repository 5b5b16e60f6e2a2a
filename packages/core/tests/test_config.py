"""Tests for configuration loading."""

import pytest

from ghai_core.config import load_config

_ENV = (
    "GITHUB_TOKEN",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "ANTHROPIC_API_KEY",
    "OLLAMA_BASE_URL",
    "OLLAMA_MODEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["model"] == "openai"
    assert config["language"] == "zh"
    assert config["repo"] is None
    assert config["approve_threshold"] == 80
    assert config["openai_api_key"] is None


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".ghai.yml"
    cfg.write_text("model: ollama\nlanguage: en\nrepo: octo/hello\n")
    config = load_config(config_path=str(cfg))
    assert config["model"] == "ollama"
    assert config["language"] == "en"
    assert config["repo"] == "octo/hello"


def test_empty_config_file(tmp_path):
    cfg = tmp_path / ".ghai.yml"
    cfg.write_text("")
    assert load_config(config_path=str(cfg))["model"] == "openai"


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".ghai.yml"
    cfg.write_text("model: ollama\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": "anthropic"})
    assert config["model"] == "anthropic"


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".ghai.yml"
    cfg.write_text("model: ollama\n")
    config = load_config(config_path=str(cfg), cli_overrides={"model": None})
    assert config["model"] == "ollama"


def test_env_vars_loaded(monkeypatch, tmp_path):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("OPENAI_API_KEY", "oai-key")
    monkeypatch.setenv("OPENAI_BASE_URL", "https://proxy.example/v1")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "ant-key")
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["github_token"] == "gh-token"
    assert config["openai_api_key"] == "oai-key"
    assert config["openai_base_url"] == "https://proxy.example/v1"
    assert config["anthropic_api_key"] == "ant-key"


def test_env_wins_over_file_for_endpoints(monkeypatch, tmp_path):
    cfg = tmp_path / ".ghai.yml"
    cfg.write_text("ollama_model: llama3\n")
    assert load_config(config_path=str(cfg))["ollama_model"] == "llama3"
    monkeypatch.setenv("OLLAMA_MODEL", "qwen2")
    assert load_config(config_path=str(cfg))["ollama_model"] == "qwen2"


def test_defaults_not_shared_between_loads(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["model"] = "anthropic"
    assert config_b["model"] == "openai"
