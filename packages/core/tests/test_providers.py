"""Tests for chat provider implementations.

Shared behaviour (chat, _call_with_retry) lives in BaseChatProvider and is
tested once via a lightweight stub. Provider-specific tests cover only what
differs between implementations: the SDK client setup and _call_api.
"""

import logging
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from ghai_core.errors import ConfigError
from ghai_core.providers.anthropic import AnthropicProvider
from ghai_core.providers.base import BaseChatProvider
from ghai_core.providers.openai import OllamaProvider, OpenAIProvider
from ghai_core.providers.registry import get_provider, resolve_provider_name


class _StubProvider(BaseChatProvider):
    def __init__(self, reply="hello"):
        self.reply = reply
        self.calls = []

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        return self.reply


# ---------------------------------------------------------------------------
# Shared behaviour, tested once through the stub
# ---------------------------------------------------------------------------


class TestBaseChatProvider:
    def test_chat_passes_prompts_through(self):
        provider = _StubProvider("answer")
        assert provider.chat("sys", "user") == "answer"
        assert provider.calls == [("sys", "user")]

    def test_none_reply_becomes_empty_string(self):
        assert _StubProvider(None).chat("s", "u") == ""


class TestRetry:
    def test_reraises_last_error_after_max_retries(self):
        class _AlwaysFail(BaseChatProvider):
            def _call_api(self, system_prompt: str, user_prompt: str) -> str:
                raise RuntimeError("network error")

        with patch("ghai_core.providers.base.time.sleep") as mock_sleep:
            with pytest.raises(RuntimeError, match="network error"):
                _AlwaysFail().chat("s", "u")
        assert mock_sleep.call_count == BaseChatProvider.MAX_RETRIES - 1

    def test_retries_on_transient_failure(self):
        call_count = 0

        class _FailOnceThenSucceed(BaseChatProvider):
            def _call_api(self, system_prompt: str, user_prompt: str) -> str:
                nonlocal call_count
                call_count += 1
                if call_count == 1:
                    raise RuntimeError("transient")
                return "ok"

        with patch("ghai_core.providers.base.time.sleep"):
            assert _FailOnceThenSucceed().chat("s", "u") == "ok"
        assert call_count == 2


# ---------------------------------------------------------------------------
# Provider-specific
# ---------------------------------------------------------------------------


class TestOpenAIProvider:
    def test_raises_import_error_without_sdk(self):
        import ghai_core.providers.openai as openai_mod

        real_openai = openai_mod._OpenAI
        openai_mod._OpenAI = None
        try:
            with pytest.raises(ImportError):
                OpenAIProvider(api_key="key")
        finally:
            openai_mod._OpenAI = real_openai

    def test_call_api_uses_configured_model(self):
        provider = OpenAIProvider(api_key="key", model="gpt-4o")
        provider.client = MagicMock()
        message = SimpleNamespace(content="reply")
        provider.client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=message)]
        )

        assert provider._call_api("sys", "user") == "reply"
        kwargs = provider.client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}

    def test_default_model(self):
        assert OpenAIProvider(api_key="key").model == OpenAIProvider.MODEL


class TestOllamaProvider:
    def test_points_at_openai_compatible_endpoint(self):
        provider = OllamaProvider(base_url="http://gpu-box:11434/")
        assert str(provider.client.base_url).rstrip("/") == "http://gpu-box:11434/v1"
        assert provider.model == "llama3"


class TestAnthropicProvider:
    def test_raises_import_error_without_sdk(self):
        with patch.dict("sys.modules", {"anthropic": None}):
            with pytest.raises(ImportError):
                AnthropicProvider(api_key="key")

    def test_model_is_claude(self):
        assert "claude" in AnthropicProvider.MODEL

    def _provider_with_reply(self, content, stop_reason="end_turn"):
        provider = AnthropicProvider.__new__(AnthropicProvider)
        provider.model = AnthropicProvider.MODEL
        provider.client = MagicMock()
        provider.client.messages.create.return_value = SimpleNamespace(content=content, stop_reason=stop_reason)
        return provider

    def test_call_api_joins_text_blocks_only(self):
        provider = self._provider_with_reply(
            [
                SimpleNamespace(type="thinking", thinking="hmm"),
                SimpleNamespace(type="text", text="## Summary\n"),
                SimpleNamespace(type="text", text="Looks good\n"),
            ]
        )
        assert provider._call_api("sys", "user") == "## Summary\nLooks good"
        kwargs = provider.client.messages.create.call_args.kwargs
        assert kwargs["system"] == "sys"
        assert kwargs["messages"] == [{"role": "user", "content": "user"}]

    def test_warns_when_reply_hits_token_limit(self, caplog):
        provider = self._provider_with_reply([SimpleNamespace(type="text", text="cut")], stop_reason="max_tokens")
        with caplog.at_level(logging.WARNING, logger="ghai_core.providers.anthropic"):
            assert provider._call_api("s", "u") == "cut"
        assert "token limit" in caplog.text


class TestRegistry:
    @pytest.mark.parametrize(
        "name, expected",
        [("openai", "openai"), ("GPT", "openai"), ("local", "ollama"), ("claude", "anthropic")],
    )
    def test_aliases(self, name, expected):
        assert resolve_provider_name(name) == expected

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown model provider"):
            resolve_provider_name("bard")

    def test_openai_requires_key(self):
        with pytest.raises(ConfigError, match="OPENAI_API_KEY"):
            get_provider({"model": "openai", "openai_api_key": None})

    def test_anthropic_requires_key(self):
        with pytest.raises(ConfigError, match="ANTHROPIC_API_KEY"):
            get_provider({"model": "anthropic"})

    def test_builds_openai_from_config(self):
        provider = get_provider({"model": "openai", "openai_api_key": "k", "openai_model": "gpt-4o"})
        assert isinstance(provider, OpenAIProvider)
        assert provider.model == "gpt-4o"

    def test_name_overrides_config(self):
        provider = get_provider({"model": "openai"}, "ollama")
        assert isinstance(provider, OllamaProvider)
