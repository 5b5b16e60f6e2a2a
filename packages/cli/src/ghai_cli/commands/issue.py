"""issue command — classify, answer or summarise GitHub issues."""

from __future__ import annotations

import click

from ghai_cli.auth import require_github_token
from ghai_cli.shared import build_provider, console, get_config, require_repo, rule, with_spinner
from ghai_core.gh.client import add_labels, comment_on_issue, get_issue, get_repo
from ghai_core.issues import classify_issue, suggest_reply, summarize_open_issues
from ghai_core.providers.registry import PROVIDER_NAMES

ACTIONS = ("classify", "suggest", "summarize")


def _require_issue_number(issue_number: int | None, action: str) -> int:
    if issue_number is None:
        raise click.UsageError(f"--id is required for --action {action}.")
    return issue_number


@click.command("issue")
@click.option("--id", "issue_number", type=int, default=None, help="Issue number.")
@click.option("--repo", "-r", default=None, help="GitHub repository in owner/name format. Defaults to config 'repo'.")
@click.option(
    "--action",
    type=click.Choice(ACTIONS),
    default="suggest",
    show_default=True,
    help="What to do with the issue(s).",
)
@click.option(
    "--model",
    "-m",
    type=click.Choice(PROVIDER_NAMES + ("gpt", "local", "claude"), case_sensitive=False),
    default=None,
    help="AI model provider. Overrides config file.",
)
@click.option("--lang", "-l", "language", type=click.Choice(["zh", "en"]), default=None, help="Output language.")
@click.option("--apply-labels", is_flag=True, help="classify: add the suggested labels to the issue.")
@click.option("--post", is_flag=True, help="suggest: post the suggested reply as an issue comment.")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompts.")
@click.pass_context
def issue_cmd(
    ctx,
    issue_number: int | None,
    repo: str | None,
    action: str,
    model: str | None,
    language: str | None,
    apply_labels: bool,
    post: bool,
    yes: bool,
):
    """AI-assisted issue triage.

    \b
    Actions:
      classify   type, priority, suggested labels and reasoning
      suggest    a draft maintainer reply (default)
      summarize  an overview of up to 20 open issues
    """
    config = get_config(ctx, model=model, language=language)
    token = require_github_token(config)
    repo = require_repo(config, repo)
    if action != "summarize":
        issue_number = _require_issue_number(issue_number, action)
    provider = build_provider(config)
    lang = config["language"]

    this_repo = with_spinner("Connecting to GitHub...", lambda: get_repo(repo, token=token))

    if action == "summarize":
        summary = with_spinner("Summarising open issues...", lambda: summarize_open_issues(provider, this_repo, lang))
        console.print("\n[bold]Open issues summary[/bold]")
        rule("═")
        console.print(summary, markup=False)
        rule("═")
        return

    issue = with_spinner(f"Fetching issue #{issue_number}...", lambda: get_issue(this_repo, issue_number))

    if action == "classify":
        result = with_spinner(f"Classifying issue #{issue_number}...", lambda: classify_issue(provider, issue, lang))
        console.print(f"\n[bold]Issue #{issue_number} classification[/bold]")
        rule()
        console.print(f"Type:      {result.type or '-'}", markup=False)
        console.print(f"Priority:  {result.priority or '-'}", markup=False)
        console.print(f"Labels:    {', '.join(result.labels) or '-'}", markup=False)
        if result.reasoning:
            console.print(f"Reasoning: {result.reasoning}", markup=False)
        rule()
        if apply_labels and result.labels:
            if yes or click.confirm(f"Add labels {', '.join(result.labels)} to #{issue_number}?", default=True):
                with_spinner("Adding labels...", lambda: add_labels(this_repo, issue_number, list(result.labels)))
                console.print("[green]Labels added.[/green]")
        return

    reply = with_spinner("Drafting a reply...", lambda: suggest_reply(provider, issue, lang))
    console.print("\n[bold]Suggested reply[/bold]")
    rule()
    console.print(reply, markup=False)
    rule()
    if post and (yes or click.confirm(f"Post this reply to #{issue_number}?", default=False)):
        with_spinner("Posting comment...", lambda: comment_on_issue(this_repo, issue_number, reply))
        console.print("[green]Comment posted.[/green]")
