"""explain command — explain a git command or a code snippet."""

from __future__ import annotations

from pathlib import Path

import click

from ghai_cli.shared import build_provider, console, get_config, rule, with_spinner
from ghai_core.explain import DETAIL_CHOICES, KIND_CODE, detect_kind, explain
from ghai_core.providers.registry import PROVIDER_NAMES


@click.command("explain")
@click.argument("text", required=False)
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Explain the contents of this file.",
)
@click.option("--lang", "-l", "language", type=click.Choice(["zh", "en"]), default=None, help="Answer language.")
@click.option("--detail", type=click.Choice(DETAIL_CHOICES), default=None, help="How detailed the answer should be.")
@click.option(
    "--model",
    "-m",
    type=click.Choice(PROVIDER_NAMES + ("gpt", "local", "claude"), case_sensitive=False),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.pass_context
def explain_cmd(
    ctx,
    text: str | None,
    file_path: Path | None,
    language: str | None,
    detail: str | None,
    model: str | None,
):
    """Explain a git command (e.g. "git rebase -i") or a piece of code."""
    if file_path is not None:
        content = file_path.read_text(encoding="utf-8", errors="replace")
        kind = KIND_CODE
        title = file_path.name
    elif text and text.strip():
        content = text
        kind = detect_kind(text)
        title = text
    else:
        raise click.UsageError("Provide a command or code to explain, or use --file.")

    config = get_config(ctx, model=model, language=language, explain_detail=detail)
    provider = build_provider(config)
    explanation = with_spinner(
        "Thinking...",
        lambda: explain(provider, content, kind, config["language"], config["explain_detail"]),
    )

    console.print(f"\n{title}", style="bold", markup=False, highlight=False)
    rule()
    console.print(explanation, markup=False)
    rule()
