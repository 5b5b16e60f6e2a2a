"""CLI entry point for ghai.

Commands:
  review   — AI review of a pull request, optionally posted to GitHub
  issue    — classify an issue, suggest a reply, or summarise open issues
  commit   — generate a commit message from the staged diff
  explain  — explain a git command or a piece of code
  readme   — generate a README.md from the project layout
  ignore   — generate or extend a .gitignore
"""

from __future__ import annotations

import importlib.metadata
import logging
import os

import click
from rich.console import Console
from rich.logging import RichHandler

from ghai_cli.commands.commit import commit_cmd
from ghai_cli.commands.explain import explain_cmd
from ghai_cli.commands.ignore import ignore_cmd
from ghai_cli.commands.issue import issue_cmd
from ghai_cli.commands.readme import readme_cmd
from ghai_cli.commands.review import review_cmd

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_status(config: dict) -> None:
    """Banner shown when ghai runs without a subcommand."""
    has_key = bool(config.get("openai_api_key") or config.get("anthropic_api_key")) or config.get("model") in (
        "ollama",
        "local",
    )
    has_token = bool(config.get("github_token"))

    console.print("\n[bold cyan]ghai[/bold cyan] — AI-powered GitHub assistant\n")
    console.print("[bold]Configuration[/bold]")
    console.print(f"  Model provider: {config.get('model')}")
    console.print(f"  AI API key:     {'[green]configured[/green]' if has_key else '[red]missing[/red]'}")
    console.print(
        f"  GitHub token:   "
        f"{'[green]configured[/green]' if has_token else '[yellow]missing (needed for review/issue)[/yellow]'}"
    )
    if not has_key:
        console.print("\n  Set OPENAI_API_KEY (and optionally OPENAI_BASE_URL / OPENAI_MODEL) to get started.")
    console.print(
        "\n[bold]Commands[/bold]\n"
        "  commit   generate a commit message for staged changes\n"
        "  review   review a pull request\n"
        "  explain  explain a git command or code\n"
        "  issue    classify, answer or summarise issues\n"
        "  readme   generate a README.md for the project\n"
        "  ignore   generate or extend a .gitignore\n"
        "\nRun [bold]ghai <command> --help[/bold] for details."
    )


@click.group(invoke_without_command=True)
@click.version_option(
    version=importlib.metadata.version("ghai"),
    prog_name="ghai",
)
@click.option(
    "--config",
    "config_path",
    default=".ghai.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="GHAI_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """AI-powered GitHub assistant: commit messages, reviews, issue triage."""
    from ghai_core.config import load_config
    from ghai_cli.auth import resolve_github_token

    _configure_logging(verbose or bool(os.environ.get("GHAI_DEBUG")))
    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token once so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is None:
        _print_status(config)


main.add_command(review_cmd)
main.add_command(issue_cmd)
main.add_command(commit_cmd)
main.add_command(explain_cmd)
main.add_command(readme_cmd)
main.add_command(ignore_cmd)
