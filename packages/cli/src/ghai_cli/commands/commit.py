"""commit command — generate (and optionally run) a commit from staged changes."""

from __future__ import annotations

from pathlib import Path

import click

from ghai_cli.shared import build_provider, console, get_config, rule, with_spinner
from ghai_core.commit import STYLE_CHOICES, generate_commit_message
from ghai_core.errors import GitError
from ghai_core.git import commit, get_staged_diff, get_staged_files, get_staged_stats
from ghai_core.providers.registry import PROVIDER_NAMES


@click.command("commit")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Git repository directory.",
)
@click.option("--lang", "-l", "language", type=click.Choice(["zh", "en"]), default=None, help="Message language.")
@click.option("--type", "-t", "style", type=click.Choice(STYLE_CHOICES), default=None, help="Message style.")
@click.option(
    "--model",
    "-m",
    type=click.Choice(PROVIDER_NAMES + ("gpt", "local", "claude"), case_sensitive=False),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--dry-run", is_flag=True, help="Only print the message; do not commit.")
@click.option("--yes", "-y", is_flag=True, help="Commit without asking for confirmation.")
@click.option("--show-files", is_flag=True, help="List the staged files.")
@click.pass_context
def commit_cmd(
    ctx,
    directory: Path,
    language: str | None,
    style: str | None,
    model: str | None,
    dry_run: bool,
    yes: bool,
    show_files: bool,
):
    """Generate a commit message for the staged changes."""
    config = get_config(ctx, model=model, language=language, commit_style=style)

    try:
        staged = get_staged_files(directory)
        if not staged:
            raise click.ClickException("No staged files. Stage changes with `git add` first.")
        stats = get_staged_stats(directory)
        diff = get_staged_diff(directory)
    except GitError as e:
        raise click.ClickException(str(e))

    console.print("\n[bold]Staged changes[/bold]")
    rule()
    console.print(
        f"  Files: {stats.files_changed} | "
        f"[green]+{stats.insertions}[/green] | [red]-{stats.deletions}[/red] | total {stats.total_changes}"
    )
    if show_files:
        for path in staged:
            console.print(f"  • {path}")
    rule()

    provider = build_provider(config)
    message = with_spinner(
        "Analysing staged changes...",
        lambda: generate_commit_message(provider, diff, config["language"], config["commit_style"]),
    )

    console.print("[bold]Commit message[/bold]")
    rule()
    console.print(message, markup=False)
    rule()

    if dry_run:
        console.print("\n[dim]Dry run: nothing committed.[/dim]")
        return

    if not (yes or click.confirm("\nCommit with this message?", default=True)):
        console.print("[yellow]Commit cancelled.[/yellow] Use -y to skip the prompt or --dry-run to only generate.")
        return

    try:
        result = commit(directory, message)
    except GitError as e:
        raise click.ClickException(str(e))
    if not result.success:
        raise click.ClickException(f"git commit failed:\n{result.message}")
    console.print(f"[green]Committed {result.commit_hash}[/green]")
