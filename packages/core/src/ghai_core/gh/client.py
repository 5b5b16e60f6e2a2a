"""Thin PyGithub wrappers for the review and issue commands."""

from __future__ import annotations

from github import Github

from ghai_core.models import FileChange, PullRequestInfo


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def _to_file_change(file) -> FileChange:
    return FileChange(
        filename=file.filename,
        status=file.status,
        additions=file.additions or 0,
        deletions=file.deletions or 0,
        patch=file.patch or "",
    )


def get_pull_request_info(repo, pr_number: int) -> PullRequestInfo:
    """Fetch a pull request and its changed files as a PullRequestInfo.

    The combined diff is each file's patch prefixed with a ``--- <path>`` line,
    in the order GitHub lists the files.
    """
    pr = repo.get_pull(pr_number)
    files = tuple(_to_file_change(f) for f in pr.get_files())
    diff = "\n\n".join(f"--- {f.filename}\n{f.patch}" for f in files)
    return PullRequestInfo(
        number=pr.number,
        title=pr.title or "",
        body=pr.body or "",
        author=pr.user.login if pr.user else "",
        state=pr.state,
        base_ref=pr.base.ref,
        head_ref=pr.head.ref,
        files=files,
        diff=diff,
    )


def get_issue(repo, issue_number: int):
    return repo.get_issue(issue_number)


def get_open_issues(repo) -> list:
    """Return open issues, excluding pull requests (GitHub lists both)."""
    return [issue for issue in repo.get_issues(state="open") if issue.pull_request is None]


def create_review(repo, pr_number: int, body: str, event: str) -> None:
    repo.get_pull(pr_number).create_review(body=body, event=event)


def comment_on_issue(repo, issue_number: int, body: str) -> None:
    repo.get_issue(issue_number).create_comment(body)


def add_labels(repo, issue_number: int, labels: list[str]) -> None:
    if labels:
        repo.get_issue(issue_number).add_to_labels(*labels)
