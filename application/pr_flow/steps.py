from domain.errors import dirty_working_tree_abort
from domain.models import ChangeSet, LinkedIssue, PublishedPullRequest, PullRequestRequest

from application.pr_flow.contracts import (
    PullRequestFlowConfig,
    PullRequestFlowDependencies,
    PullRequestFlowResult,
)


def ensure_clean(
    config: PullRequestFlowConfig,
    dependencies: PullRequestFlowDependencies,
) -> None:
    # Never operate on uncommitted state: this runs before any push or network call.
    if not dependencies.is_working_tree_clean(config.repository_directory):
        raise dirty_working_tree_abort()


def ensure_remote_tracking(
    config: PullRequestFlowConfig,
    dependencies: PullRequestFlowDependencies,
) -> tuple[str, bool]:
    # Returns the current branch and whether it had to be pushed.
    branch = dependencies.get_current_branch(config.repository_directory)
    if dependencies.remote_branch_exists(branch, config.repository_directory, config.remote):
        return branch, False
    dependencies.push_branch(branch, config.repository_directory, config.remote)
    return branch, True


def collect_diff(
    config: PullRequestFlowConfig,
    dependencies: PullRequestFlowDependencies,
) -> str:
    return dependencies.get_diff(config.base_ref, config.repository_directory)


def collect_commit_subjects(
    config: PullRequestFlowConfig,
    dependencies: PullRequestFlowDependencies,
) -> tuple[str, ...]:
    return tuple(dependencies.get_commit_subjects(config.base_ref, config.repository_directory))


def build_change_set(diff_text: str, commit_subjects: tuple[str, ...]) -> ChangeSet:
    return ChangeSet(diff_text=diff_text, commit_subjects=commit_subjects)


def generate_description(
    change_set: ChangeSet,
    linked_issue: LinkedIssue,
    dependencies: PullRequestFlowDependencies,
) -> str:
    prompt = dependencies.build_prompt(change_set.diff_text, change_set.commit_subjects, linked_issue)
    return dependencies.ai_provider.generate_description(prompt)


def build_pull_request_request(
    config: PullRequestFlowConfig,
    head_branch: str,
    description: str,
) -> PullRequestRequest:
    return PullRequestRequest(
        title=config.title,
        body=description,
        base_branch=config.base_branch,
        head_branch=head_branch,
    )


def build_dry_run_result(request: PullRequestRequest) -> PullRequestFlowResult:
    # Everything up to the description ran; nothing was submitted to the platform.
    return PullRequestFlowResult(
        status="dry_run",
        message="Dry run completed without creating a pull request",
        head_branch=request.head_branch,
        base_branch=request.base_branch,
        pr_title=request.title,
        description=request.body,
    )


def build_success_result(
    request: PullRequestRequest,
    published: PublishedPullRequest,
) -> PullRequestFlowResult:
    return PullRequestFlowResult(
        status="success",
        message="Pull request created successfully",
        head_branch=request.head_branch,
        base_branch=request.base_branch,
        pr_title=request.title,
        pr_url=published.url,
        description=request.body,
        exit_code=published.exit_code,
    )
