from __future__ import annotations

import logging

from ghai_core.providers.base import BaseChatProvider

logger = logging.getLogger(__name__)


def _reply_text(response, max_tokens: int) -> str:
    """Join the text blocks of a Messages API reply.

    Other block kinds (thinking, tool use) carry nothing the text parsers
    can use and are dropped.
    """
    parts = []
    for block in response.content:
        if getattr(block, "type", None) == "text":
            parts.append(block.text)
        else:
            logger.debug("Dropping %s block from Claude reply", getattr(block, "type", type(block).__name__))
    if getattr(response, "stop_reason", None) == "max_tokens":
        logger.warning("Claude reply stopped at the %d token limit; output may be cut off", max_tokens)
    return "".join(parts).strip()


class AnthropicProvider(BaseChatProvider):
    NAME = "anthropic"
    MODEL = "claude-sonnet-4-20250514"
    TEMPERATURE = 0.3

    def __init__(self, api_key: str, model: str | None = None):
        try:
            from anthropic import Anthropic
        except ImportError:
            raise ImportError(
                "The 'anthropic' package is required for the Claude provider. "
                "Install it with: pip install 'ghai[anthropic]'"
            )
        self.model = model or self.MODEL
        self.client = Anthropic(api_key=api_key)

    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        response = self.client.messages.create(
            model=self.model,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            temperature=self.TEMPERATURE,
            max_tokens=self.MAX_TOKENS,
        )
        return _reply_text(response, self.MAX_TOKENS)
