"""Helpers shared by the ghai subcommands."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TypeVar

import click
from github import GithubException
from rich.console import Console

from ghai_core.config import DEFAULT_CONFIG
from ghai_core.errors import ConfigError, GhaiError
from ghai_core.progress import run_with_progress

logger = logging.getLogger(__name__)

T = TypeVar("T")

console = Console()

RULE_WIDTH = 50


def get_config(ctx: click.Context, **overrides) -> dict:
    """Return the group's config with non-None command options applied."""
    config = {**DEFAULT_CONFIG, **(ctx.obj or {}).get("config", {})}
    for key, value in overrides.items():
        if value is not None:
            config[key] = value
    return config


def build_provider(config: dict, model: str | None = None):
    from ghai_core.providers.registry import get_provider

    try:
        return get_provider(config, model)
    except (ConfigError, ValueError) as e:
        raise click.UsageError(str(e))


def require_repo(config: dict, repo: str | None) -> str:
    repo = repo or config.get("repo")
    if not repo:
        raise click.UsageError("No repository given. Pass --repo owner/name or set 'repo' in .ghai.yml.")
    return repo


def with_spinner(label: str, operation: Callable[[], T]) -> T:
    """Run ``operation`` behind the progress spinner, reporting failures as CLI errors.

    The underlying error message is shown unchanged.
    """
    try:
        return run_with_progress(label, operation)
    except click.ClickException:
        raise
    except (GhaiError, GithubException) as e:
        raise click.ClickException(str(e))
    except Exception as e:
        logger.debug("%s failed", label, exc_info=True)
        raise click.ClickException(str(e) or e.__class__.__name__)


def rule(char: str = "─") -> None:
    console.print(char * RULE_WIDTH, style="dim")


def write_text_file(path: Path, content: str) -> None:
    if not content.endswith("\n"):
        content += "\n"
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise click.ClickException(f"Could not write {path}: {e}")
