import logging
from typing import Callable

from application.pr_flow import PullRequestFlowConfig, PullRequestFlowDependencies
from application.ports import PullRequestPublisher
from domain.prompt import build_description_prompt
from infrastructure.ai.provider_factory import build_ai_provider_runtime
from infrastructure.cli.settings import CliSettings
from infrastructure.github.github_client import GitHubClient
from infrastructure.github.issue_linker import resolve_linked_issue
from infrastructure.github.pr_gateway import GhCliPublisher, GitHubApiPublisher
from infrastructure.github.remote_url import parse_repository_slug
from infrastructure.observability.logging_utils import log_event, register_sensitive_values
from infrastructure.observability.workflow_observer import (
    chain_step_observers,
    observe_change_set,
    observe_workflow_step,
)
from infrastructure.repo.operations import (
    get_commit_subjects,
    get_current_branch,
    get_diff,
    get_remote_url,
    is_working_tree_clean,
    push_branch,
    remote_branch_exists,
)


logger = logging.getLogger(__name__)


def build_pr_flow_config(settings: CliSettings) -> PullRequestFlowConfig:
    return PullRequestFlowConfig(
        repository_directory=settings.repository_directory,
        base_branch=settings.base_branch,
        base_ref=settings.base_ref,
        remote=settings.remote,
        title=settings.title,
        dry_run=settings.dry_run,
    )


def build_pr_publisher(settings: CliSettings) -> PullRequestPublisher:
    if settings.publisher == "gh":
        return GhCliPublisher(
            settings.repository_directory,
            github_token=settings.github_token,
            base_env=settings.environment,
        )

    owner, repo = settings.github_owner, settings.github_repo
    if not owner or not repo:
        remote_url = get_remote_url(settings.repository_directory, settings.remote)
        parsed_owner, parsed_repo = parse_repository_slug(remote_url)
        owner, repo = owner or parsed_owner, repo or parsed_repo
    log_event(logger, logging.INFO, "github.repository.resolved", owner=owner, repo=repo)
    # load_settings_from_env guarantees a token for the api publisher.
    client = GitHubClient(token=settings.github_token or "", owner=owner, repo=repo)
    return GitHubApiPublisher(client)


def build_pr_flow_dependencies(
    settings: CliSettings,
    *,
    extra_step_observer: Callable[[str, str, str | None], None] | None = None,
) -> PullRequestFlowDependencies:
    register_sensitive_values(settings.ai_api_key, settings.github_token)
    ai_runtime = build_ai_provider_runtime(settings)
    observe_step = observe_workflow_step
    if extra_step_observer is not None:
        observe_step = chain_step_observers(observe_workflow_step, extra_step_observer)

    return PullRequestFlowDependencies(
        is_working_tree_clean=is_working_tree_clean,
        get_current_branch=get_current_branch,
        remote_branch_exists=remote_branch_exists,
        push_branch=push_branch,
        get_diff=get_diff,
        get_commit_subjects=get_commit_subjects,
        resolve_linked_issue=resolve_linked_issue,
        build_prompt=build_description_prompt,
        ai_provider=ai_runtime.adapter,
        publisher=build_pr_publisher(settings),
        observe_change_set=observe_change_set,
        observe_step=observe_step,
    )
