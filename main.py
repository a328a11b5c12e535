import logging
import sys
import uuid

from dotenv import load_dotenv
from rich.console import Console

from domain.errors import PullRequestAutomationError
from infrastructure.cli.runner import execute_workflow, report_failure, start_banner_observer
from infrastructure.cli.settings import load_settings_from_env
from infrastructure.cli.workflow_factory import build_pr_flow_config, build_pr_flow_dependencies
from infrastructure.observability.context import reset_run_id, set_run_id
from infrastructure.observability.logging_utils import configure_logging, log_event
from infrastructure.observability.progress import ProgressStepObserver
from infrastructure.observability.workflow_observer import chain_step_observers


logger = logging.getLogger(__name__)


def main() -> int:
    load_dotenv()
    console = Console()
    error_console = Console(stderr=True)
    run_id_token = set_run_id(uuid.uuid4().hex[:12])
    try:
        try:
            settings = load_settings_from_env()
        except PullRequestAutomationError as error:
            configure_logging()
            return report_failure(error, error_console)

        configure_logging(settings.log_level)
        log_event(logger, logging.INFO, "cli.workflow.start", publisher=settings.publisher, dry_run=settings.dry_run)
        show_progress = error_console.is_terminal if settings.progress is None else settings.progress

        progress = ProgressStepObserver(error_console) if show_progress else None
        cli_observer = start_banner_observer(console)
        if progress is not None:
            cli_observer = chain_step_observers(cli_observer, progress)
        try:
            dependencies = build_pr_flow_dependencies(settings, extra_step_observer=cli_observer)
        except PullRequestAutomationError as error:
            return report_failure(error, error_console)

        config = build_pr_flow_config(settings)
        if progress is None:
            return execute_workflow(config, dependencies, console=console, error_console=error_console)
        with progress:
            return execute_workflow(config, dependencies, console=console, error_console=error_console)
    finally:
        reset_run_id(run_id_token)


if __name__ == "__main__":
    sys.exit(main())
