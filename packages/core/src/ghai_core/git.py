"""Local git access for the commit command, plus the diff-stat parser."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Union

from ghai_core.errors import GitError
from ghai_core.models import CommitResult, DiffStats

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _leading_int(clause: str) -> int | None:
    tokens = clause.split()
    if not tokens:
        return None
    try:
        value = int(tokens[0])
    except ValueError:
        return None
    return value if value >= 0 else None


def parse_diff_stat(last_line: str) -> DiffStats:
    """Parse ``N files changed, M insertions(+), K deletions(-)``.

    git omits a clause when its count is zero, so any field without a clause
    stays 0. Clauses whose count does not parse are ignored.
    """
    if last_line is None:
        raise TypeError("last_line must be a str, not None")
    counts = {"files_changed": 0, "insertions": 0, "deletions": 0}
    for clause in last_line.split(","):
        clause = clause.strip()
        if "file" in clause:
            field = "files_changed"
        elif "insertion" in clause:
            field = "insertions"
        elif "deletion" in clause:
            field = "deletions"
        else:
            continue
        value = _leading_int(clause)
        if value is None:
            logger.debug("Ignoring unparseable diff-stat clause: %r", clause)
            continue
        counts[field] = value
    return DiffStats(**counts)


def parse_diff_stat_output(output: str) -> DiffStats:
    """Parse full ``git diff --stat`` output using its last non-empty line."""
    lines = [line for line in output.splitlines() if line.strip()]
    return parse_diff_stat(lines[-1] if lines else "")


def _git(repo_path: PathLike, *args: str) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            ["git", *args],
            cwd=str(repo_path),
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH.")


def _git_output(repo_path: PathLike, *args: str) -> str:
    result = _git(repo_path, *args)
    if result.returncode != 0:
        raise GitError(f"git {' '.join(args)} failed: {result.stderr.strip() or result.stdout.strip()}")
    return result.stdout


def get_staged_files(repo_path: PathLike = ".") -> list[str]:
    output = _git_output(repo_path, "diff", "--cached", "--name-only")
    return [line for line in output.splitlines() if line.strip()]


def get_staged_diff(repo_path: PathLike = ".") -> str:
    return _git_output(repo_path, "diff", "--cached")


def get_staged_stats(repo_path: PathLike = ".") -> DiffStats:
    return parse_diff_stat_output(_git_output(repo_path, "diff", "--cached", "--stat"))


def get_last_commit_hash(repo_path: PathLike = ".") -> str:
    return _git_output(repo_path, "rev-parse", "--short", "HEAD").strip()


def commit(repo_path: PathLike, message: str) -> CommitResult:
    """Run ``git commit -m message``.

    A non-zero exit (hook rejection, nothing to commit) is reported in the
    result rather than raised, with git's combined output as the message.
    """
    result = _git(repo_path, "commit", "-m", message)
    output = "\n".join(part.strip() for part in (result.stdout, result.stderr) if part.strip())
    if result.returncode != 0:
        logger.debug("git commit exited with %d", result.returncode)
        return CommitResult(success=False, commit_hash=None, message=output)
    return CommitResult(success=True, commit_hash=get_last_commit_hash(repo_path), message=output)
