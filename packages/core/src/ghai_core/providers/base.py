"""Base chat provider implementing the Template Method pattern.

All providers share the same call shape:
    chat() → _call_with_retry() → _call_api()   ← only this differs per provider

Subclasses implement two things only:
  - __init__: validate and store the SDK client
  - _call_api: make one raw API call and return the text response

Prompt construction and response parsing belong to the feature services
(ghai_core.review, ghai_core.issues, ...), not to providers.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

# Shared defaults; subclasses may override them as class attributes.
_MAX_RETRIES = 3
_MAX_TOKENS = 4096


class BaseChatProvider(ABC):
    NAME: str = "base"
    MAX_RETRIES: int = _MAX_RETRIES
    MAX_TOKENS: int = _MAX_TOKENS
    TEMPERATURE: float = 0.7

    def chat(self, system_prompt: str, user_prompt: str) -> str:
        """Send one system + user prompt pair and return the reply text."""
        return self._call_with_retry(system_prompt, user_prompt) or ""

    @abstractmethod
    def _call_api(self, system_prompt: str, user_prompt: str) -> str:
        """Make a single API call and return the raw text response.

        It should raise on failure — _call_with_retry handles retries and logging.
        """

    def _call_with_retry(self, system_prompt: str, user_prompt: str) -> str:
        """Retry _call_api up to MAX_RETRIES times with exponential backoff.

        The last error is re-raised unchanged so callers can report it.
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                return self._call_api(system_prompt, user_prompt)
            except Exception as e:
                if attempt == self.MAX_RETRIES - 1:
                    logger.error(
                        "%s API failed after %d attempts: %s",
                        self.__class__.__name__,
                        self.MAX_RETRIES,
                        e,
                    )
                    raise
                delay = 2**attempt
                logger.warning(
                    "%s API error (attempt %d/%d): %s. Retrying in %ds...",
                    self.__class__.__name__,
                    attempt + 1,
                    self.MAX_RETRIES,
                    e,
                    delay,
                )
                time.sleep(delay)
        raise RuntimeError("MAX_RETRIES must be at least 1")
