import logging

from rich.console import Console
from rich.markup import escape

from application.pr_flow import (
    PullRequestFlowConfig,
    PullRequestFlowDependencies,
    PullRequestFlowResult,
    run_pr_flow,
)
from domain.errors import GENERIC_FAILURE_EXIT_CODE, PublishError, PullRequestAutomationError, UserVisibleAbort
from infrastructure.observability.logging_utils import log_event, safe_message
from infrastructure.observability.progress import STAGE_LABELS
from infrastructure.observability.workflow_observer import StepObserver


logger = logging.getLogger(__name__)


def report_failure(error: Exception, console: Console) -> int:
    if isinstance(error, UserVisibleAbort):
        console.print(f"[bright_red]{escape(str(error))}")
        return error.exit_code

    message = safe_message(str(error))
    if isinstance(error, PullRequestAutomationError):
        stage_label = STAGE_LABELS.get(error.stage or "", error.stage or "Setup")
        console.print(f"[bright_red]{escape(stage_label)} failed: {escape(message)}")
        if isinstance(error, PublishError) and error.details and error.details not in message:
            console.print(f"[red]{escape(safe_message(error.details))}")
        exit_code = error.exit_code
    else:
        console.print(f"[bright_red]Unexpected error: {escape(message)}")
        exit_code = GENERIC_FAILURE_EXIT_CODE

    log_event(
        logger,
        logging.ERROR,
        "cli.workflow.failed",
        stage=getattr(error, "stage", None),
        error=message,
        exit_code=exit_code,
    )
    return exit_code


def start_banner_observer(console: Console) -> StepObserver:
    # The banner only appears once the working tree is known to be clean.
    def observe(step: str, status: str, detail: str | None = None) -> None:
        if step == "verify_clean" and status == "success":
            console.print("[bold blue]Starting pullrequest process...")

    return observe


def report_success(result: PullRequestFlowResult, console: Console) -> None:
    if result.status == "dry_run":
        console.print("[yellow]Dry run: no pull request was created. Generated description:")
        console.print(escape(result.description or ""), highlight=False)
        return
    if result.pr_url:
        console.print(f"Pull request: {escape(result.pr_url)}", highlight=False)
    console.print("[bold green]pullrequest process completed.")


def execute_workflow(
    config: PullRequestFlowConfig,
    dependencies: PullRequestFlowDependencies,
    *,
    console: Console,
    error_console: Console,
) -> int:
    try:
        result = run_pr_flow(config, dependencies)
    except PullRequestAutomationError as error:
        return report_failure(error, error_console)

    log_event(
        logger,
        logging.INFO,
        "cli.workflow.end",
        status=result.status,
        message=result.message,
        pr_url=result.pr_url,
    )
    report_success(result, console)
    return result.exit_code
