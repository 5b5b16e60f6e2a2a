from __future__ import annotations

try:
    from openai import OpenAI as _OpenAI
except ImportError:
    _OpenAI = None  # type: ignore[assignment,misc]

from ghai_core.providers.base import BaseChatProvider


def _require_sdk() -> None:
    if _OpenAI is None:
        raise ImportError("The 'openai' package is required for this provider. " "Install it with: pip install openai")


class OpenAIProvider(BaseChatProvider):
    NAME = "openai"
    MODEL = "gpt-4o-mini"
    TEMPERATURE = 0.7

    def __init__(self, api_key: str, base_url: str | None = None, model: str | None = None):
        _require_sdk()
        self.model = model or self.MODEL
        self.client = _OpenAI(api_key=api_key, base_url=base_url)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        return response.choices[0].message.content or ""


class OllamaProvider(OpenAIProvider):
    """Local models served by Ollama through its OpenAI-compatible endpoint."""

    NAME = "ollama"
    MODEL = "llama3"
    BASE_URL = "http://localhost:11434"

    def __init__(self, base_url: str | None = None, model: str | None = None):
        # Ollama ignores the key, but the SDK refuses to build a client without one.
        root = (base_url or self.BASE_URL).rstrip("/")
        super().__init__(api_key="ollama", base_url=f"{root}/v1", model=model)
