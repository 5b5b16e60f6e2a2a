from __future__ import annotations

from ghai_core.errors import ConfigError
from ghai_core.providers.base import BaseChatProvider

_ALIASES = {
    "openai": "openai",
    "gpt": "openai",
    "ollama": "ollama",
    "local": "ollama",
    "anthropic": "anthropic",
    "claude": "anthropic",
}

PROVIDER_NAMES = ("openai", "ollama", "anthropic")


def resolve_provider_name(name: str) -> str:
    try:
        return _ALIASES[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown model provider: {name!r}. Choose one of: {', '.join(sorted(_ALIASES))}.")


def get_provider(config: dict, name: str | None = None) -> BaseChatProvider:
    """Build the chat provider selected by ``name`` (or ``config["model"]``)."""
    provider = resolve_provider_name(name or config["model"])

    if provider == "openai":
        from ghai_core.providers.openai import OpenAIProvider

        if not config.get("openai_api_key"):
            raise ConfigError("OPENAI_API_KEY environment variable is not set.")
        return OpenAIProvider(
            api_key=config["openai_api_key"],
            base_url=config.get("openai_base_url"),
            model=config.get("openai_model"),
        )

    if provider == "ollama":
        from ghai_core.providers.openai import OllamaProvider

        return OllamaProvider(base_url=config.get("ollama_base_url"), model=config.get("ollama_model"))

    from ghai_core.providers.anthropic import AnthropicProvider

    if not config.get("anthropic_api_key"):
        raise ConfigError("ANTHROPIC_API_KEY environment variable is not set.")
    return AnthropicProvider(api_key=config["anthropic_api_key"], model=config.get("anthropic_model"))
