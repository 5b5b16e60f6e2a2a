"""readme command — generate a README from the project's build files and layout."""

from __future__ import annotations

from pathlib import Path

import click

from ghai_cli.shared import build_provider, console, get_config, rule, with_spinner, write_text_file
from ghai_core.providers.registry import PROVIDER_NAMES
from ghai_core.readme import analyze_project, generate_readme

_SHOWN_DEPENDENCIES = 5


@click.command("readme")
@click.option(
    "--dir",
    "-d",
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Project directory.",
)
@click.option("--output", "-o", default="README.md", show_default=True, help="File to write, relative to --dir.")
@click.option("--lang", "-l", "language", type=click.Choice(["zh", "en"]), default=None, help="README language.")
@click.option(
    "--model",
    "-m",
    type=click.Choice(PROVIDER_NAMES + ("gpt", "local", "claude"), case_sensitive=False),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--dry-run", is_flag=True, help="Only print the README; do not write it.")
@click.option("--yes", "-y", is_flag=True, help="Write without asking, overwriting an existing file.")
@click.pass_context
def readme_cmd(
    ctx,
    directory: Path,
    output: str,
    language: str | None,
    model: str | None,
    dry_run: bool,
    yes: bool,
):
    """Generate a README.md for a project."""
    config = get_config(ctx, model=model, language=language)
    try:
        project = analyze_project(directory)
    except OSError as e:
        raise click.ClickException(f"Cannot inspect {directory}: {e}")

    console.print("\n[bold]Detected project[/bold]")
    rule()
    console.print(f"  Name:         {project.name}", markup=False)
    console.print(f"  Type:         {', '.join(project.project_types)}", markup=False)
    if project.description:
        console.print(f"  Description:  {project.description}", markup=False)
    if project.dependencies:
        console.print(
            f"  Dependencies: {', '.join(project.dependencies[:_SHOWN_DEPENDENCIES])}", markup=False
        )
    rule()

    provider = build_provider(config)
    content = with_spinner(
        "Generating README...",
        lambda: generate_readme(provider, project, config["language"]),
    )

    console.print("[bold]Generated README[/bold]")
    rule()
    console.print(content, markup=False)
    rule()

    if dry_run:
        console.print("\n[dim]Dry run: nothing written.[/dim]")
        return

    target = directory / output
    if not yes:
        if target.exists():
            confirmed = click.confirm(f"{output} already exists. Overwrite it?", default=False)
        else:
            confirmed = click.confirm(f"Write {output}?", default=True)
        if not confirmed:
            console.print("[yellow]Cancelled.[/yellow]")
            return

    write_text_file(target, content)
    console.print(f"Wrote {target}", style="green", markup=False)
