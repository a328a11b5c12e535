from domain.commit_log import parse_commit_subjects
from domain.errors import (
    ConfigurationError,
    GenerationError,
    PublishError,
    PullRequestAutomationError,
    RepositoryAccessError,
    UserVisibleAbort,
)
from domain.models import (
    DEFAULT_PR_TITLE,
    ChangeSet,
    LinkedIssue,
    PublishedPullRequest,
    PullRequestRequest,
    RepositoryState,
)
from domain.prompt import build_description_prompt

__all__ = [
    "DEFAULT_PR_TITLE",
    "ChangeSet",
    "LinkedIssue",
    "PublishedPullRequest",
    "PullRequestRequest",
    "RepositoryState",
    "ConfigurationError",
    "GenerationError",
    "PublishError",
    "PullRequestAutomationError",
    "RepositoryAccessError",
    "UserVisibleAbort",
    "build_description_prompt",
    "parse_commit_subjects",
]
