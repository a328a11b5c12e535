from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from application.ports import AIProvider, PullRequestPublisher
from domain.models import DEFAULT_PR_TITLE, ChangeSet, LinkedIssue


def _noop_observe_change_set(_: ChangeSet) -> None:
    return None


def _noop_observe_step(_: str, __: str, ___: str | None = None) -> None:
    return None


@dataclass(frozen=True)
class PullRequestFlowConfig:
    repository_directory: Path
    base_branch: str = "master"
    base_ref: str = "origin/master"
    remote: str = "origin"
    title: str = DEFAULT_PR_TITLE
    dry_run: bool = False


@dataclass(frozen=True)
class PullRequestFlowDependencies:
    is_working_tree_clean: Callable[[Path], bool]
    get_current_branch: Callable[[Path], str]
    remote_branch_exists: Callable[[str, Path, str], bool]
    push_branch: Callable[[str, Path, str], None]
    get_diff: Callable[[str, Path], str]
    get_commit_subjects: Callable[[str, Path], tuple[str, ...]]
    resolve_linked_issue: Callable[[str], LinkedIssue]
    build_prompt: Callable[[str, tuple[str, ...], LinkedIssue], str]
    ai_provider: AIProvider
    publisher: PullRequestPublisher
    observe_change_set: Callable[[ChangeSet], None] = _noop_observe_change_set
    observe_step: Callable[[str, str, str | None], None] = _noop_observe_step


@dataclass(frozen=True)
class PullRequestFlowResult:
    status: str
    message: str
    head_branch: str | None = None
    base_branch: str | None = None
    pr_title: str | None = None
    pr_url: str | None = None
    description: str | None = None
    failed_stage: str | None = None
    error: str | None = None
    exit_code: int = 0
