from dataclasses import dataclass


DEFAULT_PR_TITLE = "Automated Pull Request"

LinkedIssue = str | None


@dataclass(frozen=True)
class RepositoryState:
    is_clean: bool
    current_branch: str
    has_remote_branch: bool


@dataclass(frozen=True)
class ChangeSet:
    diff_text: str
    commit_subjects: tuple[str, ...]


@dataclass(frozen=True)
class PullRequestRequest:
    body: str
    base_branch: str
    head_branch: str
    title: str = DEFAULT_PR_TITLE


@dataclass(frozen=True)
class PublishedPullRequest:
    url: str | None
    exit_code: int = 0
