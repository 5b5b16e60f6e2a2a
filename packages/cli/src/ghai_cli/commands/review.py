"""review command — run AI review on a pull request."""

from __future__ import annotations

import click

from ghai_cli.auth import require_github_token
from ghai_cli.shared import build_provider, console, get_config, require_repo, rule, with_spinner
from ghai_core.gh.client import get_pull_request_info, get_repo
from ghai_core.models import ParsedReview
from ghai_core.providers.registry import PROVIDER_NAMES
from ghai_core.review import FOCUS_CHOICES, post_review, review_pull_request

_EVENT_STYLE = {"APPROVE": "green", "COMMENT": "yellow"}


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def print_review(result: ParsedReview) -> None:
    console.print("\n[bold]PR review[/bold]")
    rule("═")
    console.print(result.summary or "(no summary)", markup=False)
    console.print()

    if result.issues:
        console.print("[bold yellow]Issues[/bold yellow]")
        for issue in result.issues:
            console.print(f"  • {issue}", markup=False)
        console.print()

    if result.suggestions:
        console.print("[bold cyan]Suggestions[/bold cyan]")
        for suggestion in result.suggestions:
            console.print(f"  • {suggestion}", markup=False)

    rule("═")
    style = _score_style(result.score)
    console.print(f"Score: [{style}]{result.score}[/{style}]/100")


@click.command("review")
@click.option("--repo", "-r", default=None, help="GitHub repository in owner/name format. Defaults to config 'repo'.")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option(
    "--model",
    "-m",
    type=click.Choice(PROVIDER_NAMES + ("gpt", "local", "claude"), case_sensitive=False),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option(
    "--focus",
    type=click.Choice(FOCUS_CHOICES, case_sensitive=False),
    default=None,
    help="What the review should concentrate on. Overrides config 'review_focus'.",
)
@click.option("--lang", "-l", "language", type=click.Choice(["zh", "en"]), default=None, help="Review language.")
@click.option("--comment", "post", is_flag=True, help="Post the review to the pull request.")
@click.pass_context
def review_cmd(
    ctx,
    repo: str | None,
    pr_number: int,
    model: str | None,
    focus: str | None,
    language: str | None,
    post: bool,
):
    """AI review of a GitHub pull request.

    Fetches the pull request diff, asks the model for a summary, a 0-100
    score, issues and suggestions, and prints them. With --comment the review
    is posted back: APPROVE when the score reaches the configured threshold,
    COMMENT otherwise.

    \b
    Required environment variables:
      GITHUB_TOKEN         GitHub personal access token (or use gh CLI)
      OPENAI_API_KEY       Required when using --model openai
      ANTHROPIC_API_KEY    Required when using --model anthropic
    """
    config = get_config(ctx, model=model, review_focus=focus, language=language)
    token = require_github_token(config)
    repo = require_repo(config, repo)
    provider = build_provider(config)

    this_repo = with_spinner(f"Fetching PR #{pr_number}...", lambda: get_repo(repo, token=token))
    pr = with_spinner(f"Fetching PR #{pr_number}...", lambda: get_pull_request_info(this_repo, pr_number))
    result = with_spinner(
        f"Reviewing PR #{pr_number}...",
        lambda: review_pull_request(provider, pr, config["review_focus"], config["language"]),
    )

    print_review(result)

    if post:
        threshold = config.get("approve_threshold", 80)
        event = with_spinner(
            "Posting review to GitHub...", lambda: post_review(this_repo, pr_number, result, threshold)
        )
        style = _EVENT_STYLE.get(event, "white")
        console.print(f"\n[{style}]Review posted: {event}[/{style}]")
