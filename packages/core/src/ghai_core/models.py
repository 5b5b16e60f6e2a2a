"""Value objects shared by the parsers, services and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_SCORE = 70
MAX_SCORE = 100


@dataclass(frozen=True)
class ParsedReview:
    summary: str = ""
    score: int = DEFAULT_SCORE
    issues: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()


@dataclass(frozen=True)
class ParsedClassification:
    # Every field is "" (or empty) when the model left it out.
    type: str = ""
    priority: str = ""
    labels: tuple[str, ...] = ()
    reasoning: str = ""


@dataclass(frozen=True)
class DiffStats:
    files_changed: int = 0
    insertions: int = 0
    deletions: int = 0

    @property
    def total_changes(self) -> int:
        return self.insertions + self.deletions


@dataclass(frozen=True)
class FileChange:
    filename: str
    status: str
    additions: int = 0
    deletions: int = 0
    patch: str = ""


@dataclass(frozen=True)
class PullRequestInfo:
    """Snapshot of the pull request fields the review prompt needs.

    Built from a PyGithub PullRequest by ghai_core.gh.client so services never
    touch the SDK objects directly.
    """

    number: int
    title: str
    body: str
    author: str
    state: str
    base_ref: str
    head_ref: str
    files: tuple[FileChange, ...] = ()
    diff: str = ""

    @property
    def total_changes(self) -> int:
        return sum(f.additions + f.deletions for f in self.files)


@dataclass(frozen=True)
class ProjectContext:
    """What the README prompt is told about a project directory."""

    name: str
    description: str = ""
    project_types: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    main_files: tuple[str, ...] = ()
    structure_tree: str = ""


@dataclass(frozen=True)
class ProjectInfo:
    # Each tuple holds ("Unknown",) when nothing was detected, except frameworks.
    project_types: tuple[str, ...] = ()
    build_tools: tuple[str, ...] = ()
    ides: tuple[str, ...] = ()
    frameworks: tuple[str, ...] = ()
    detected_files: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommitResult:
    success: bool
    commit_hash: str | None
    message: str


@dataclass
class TaskOutcome(Generic[T]):
    """Result slot handed from a worker thread back to the caller.

    Written once by the worker before it signals completion; read once by the
    caller afterwards.
    """

    value: T | None = None
    error: BaseException | None = field(default=None)

    @property
    def failed(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
