import logging

from domain.errors import GENERIC_FAILURE_EXIT_CODE, PullRequestAutomationError
from domain.models import ChangeSet

from application.pr_flow.contracts import (
    PullRequestFlowConfig,
    PullRequestFlowDependencies,
    PullRequestFlowResult,
)
from application.pr_flow.steps import (
    build_change_set,
    build_dry_run_result,
    build_pull_request_request,
    build_success_result,
    collect_commit_subjects,
    collect_diff,
    ensure_clean,
    ensure_remote_tracking,
    generate_description,
)


logger = logging.getLogger(__name__)


def _observe(
    dependencies: PullRequestFlowDependencies,
    step: str,
    status: str,
    detail: str | None = None,
) -> None:
    # Observers only watch the run; a broken one is logged and ignored.
    try:
        dependencies.observe_step(step, status, detail)
    except Exception as error:  # noqa: BLE001
        logger.warning(
            'event=workflow.observer.failed step="%s" status="%s" error="%s"',
            step,
            status,
            error,
        )


def _observe_change_set(dependencies: PullRequestFlowDependencies, change_set: ChangeSet) -> None:
    try:
        dependencies.observe_change_set(change_set)
    except Exception as error:  # noqa: BLE001
        logger.warning('event=workflow.observer.failed step="collect_commits" status="change_set" error="%s"', error)


def run_pr_flow(
    config: PullRequestFlowConfig,
    dependencies: PullRequestFlowDependencies,
    *,
    raise_on_error: bool = True,
) -> PullRequestFlowResult:
    stage = "verify_clean"
    try:
        _observe(dependencies, stage, "start")
        ensure_clean(config, dependencies)
        _observe(dependencies, stage, "success")

        stage = "ensure_remote"
        _observe(dependencies, stage, "start")
        head_branch, pushed = ensure_remote_tracking(config, dependencies)
        _observe(
            dependencies,
            stage,
            "success",
            detail=f"pushed {head_branch} to {config.remote}" if pushed else head_branch,
        )

        stage = "collect_diff"
        _observe(dependencies, stage, "start")
        diff_text = collect_diff(config, dependencies)
        _observe(dependencies, stage, "success", detail=f"base_ref={config.base_ref}")

        stage = "collect_commits"
        _observe(dependencies, stage, "start")
        commit_subjects = collect_commit_subjects(config, dependencies)
        change_set = build_change_set(diff_text, commit_subjects)
        _observe_change_set(dependencies, change_set)
        _observe(dependencies, stage, "success", detail=f"commits_count={len(commit_subjects)}")

        stage = "resolve_issue"
        _observe(dependencies, stage, "start")
        linked_issue = dependencies.resolve_linked_issue(head_branch)
        _observe(dependencies, stage, "success", detail=linked_issue or "none")

        stage = "generate_description"
        _observe(dependencies, stage, "start")
        description = generate_description(change_set, linked_issue, dependencies)
        _observe(dependencies, stage, "success")

        request = build_pull_request_request(config, head_branch, description)

        stage = "publish"
        if config.dry_run:
            _observe(dependencies, stage, "success", detail="skipped (dry_run=true)")
            return build_dry_run_result(request)

        _observe(dependencies, stage, "start")
        published = dependencies.publisher.publish(request)
        _observe(dependencies, stage, "success", detail=published.url)
        return build_success_result(request, published)
    except Exception as error:
        exit_code = GENERIC_FAILURE_EXIT_CODE
        if isinstance(error, PullRequestAutomationError):
            if error.stage is None:
                error.stage = stage
            exit_code = error.exit_code
        _observe(dependencies, stage, "error", detail=str(error))
        if raise_on_error:
            raise
        return PullRequestFlowResult(
            status="error",
            message="Pull request flow failed",
            failed_stage=stage,
            error=str(error),
            exit_code=exit_code,
        )
