"""ignore command — generate or extend a .gitignore for the project."""

from __future__ import annotations

from pathlib import Path

import click

from ghai_cli.shared import build_provider, console, get_config, rule, with_spinner, write_text_file
from ghai_core.ignore import analyze_project, generate_gitignore, merge_gitignore
from ghai_core.providers.registry import PROVIDER_NAMES


@click.command("ignore")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Project directory.",
)
@click.option("--output", "-o", default=".gitignore", show_default=True, help="File to write, relative to --dir.")
@click.option("--append", is_flag=True, help="Add only missing rules below the existing file instead of replacing it.")
@click.option("--lang", "-l", "language", type=click.Choice(["zh", "en"]), default=None, help="Comment language.")
@click.option(
    "--model",
    "-m",
    type=click.Choice(PROVIDER_NAMES + ("gpt", "local", "claude"), case_sensitive=False),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--dry-run", is_flag=True, help="Only print the rules; do not write them.")
@click.option("--yes", "-y", is_flag=True, help="Write without asking.")
@click.pass_context
def ignore_cmd(
    ctx,
    directory: Path,
    output: str,
    append: bool,
    language: str | None,
    model: str | None,
    dry_run: bool,
    yes: bool,
):
    """Generate a .gitignore that fits the project."""
    config = get_config(ctx, model=model, language=language)
    target = directory / output
    try:
        info = analyze_project(directory)
        existing = target.read_text(encoding="utf-8", errors="replace") if target.is_file() else ""
    except OSError as e:
        raise click.ClickException(f"Cannot inspect {directory}: {e}")

    console.print("\n[bold]Detected project[/bold]")
    rule()
    console.print(f"  Types:      {', '.join(info.project_types)}", markup=False)
    console.print(f"  Build:      {', '.join(info.build_tools)}", markup=False)
    console.print(f"  Editors:    {', '.join(info.ides)}", markup=False)
    if info.frameworks:
        console.print(f"  Frameworks: {', '.join(info.frameworks)}", markup=False)
    rule()

    provider = build_provider(config)
    content = with_spinner(
        "Generating .gitignore...",
        lambda: generate_gitignore(provider, info, existing, append, config["language"]),
    )

    console.print(f"[bold]Generated {'rules' if append else output}[/bold]", highlight=False)
    rule()
    console.print(content, markup=False)
    rule()

    if dry_run:
        console.print("\n[dim]Dry run: nothing written.[/dim]")
        return

    if not yes:
        if target.exists() and not append:
            if not click.confirm(f"{output} already exists. Overwrite it?", default=False):
                if not click.confirm("Append to the existing file instead?", default=True):
                    console.print("[yellow]Cancelled.[/yellow]")
                    return
                append = True
        elif not click.confirm(f"Write {output}?", default=True):
            console.print("[yellow]Cancelled.[/yellow]")
            return

    write_text_file(target, merge_gitignore(existing, content) if append else content)
    verb = "Updated" if append and existing.strip() else "Wrote"
    console.print(f"{verb} {target}", style="green", markup=False)
