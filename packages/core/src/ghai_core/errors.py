"""Exception types raised by ghai_core.

Parsing helpers never raise for malformed model text, so nothing here covers
that case. These errors describe upstream or environment failures that the
CLI turns into user-facing messages.
"""

from __future__ import annotations


class GhaiError(Exception):
    """Base class for errors raised by ghai itself (not by SDKs it wraps)."""


class ConfigError(GhaiError):
    """A required setting (API key, repository, token) is missing."""


class GitError(GhaiError):
    """git could not be run or returned an unexpected failure."""


class NothingStagedError(GhaiError):
    """There are no staged changes to describe."""


class TaskTimeoutError(GhaiError):
    """A background task did not finish within its timeout.

    The worker thread is not stopped and may still produce side effects.
    """

    def __init__(self, label: str, timeout: float):
        super().__init__(f"{label!r} did not finish within {timeout:g}s")
        self.label = label
        self.timeout = timeout
