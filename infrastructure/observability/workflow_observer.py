import logging
from typing import Callable

from domain.models import ChangeSet
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)

StepObserver = Callable[[str, str, str | None], None]


def observe_change_set(change_set: ChangeSet) -> None:
    log_event(
        logger,
        logging.INFO,
        "workflow.change_set.collected",
        diff_lines=len(change_set.diff_text.splitlines()),
        diff_bytes=len(change_set.diff_text.encode("utf-8")),
        commits_count=len(change_set.commit_subjects),
    )


def observe_workflow_step(step: str, status: str, detail: str | None = None) -> None:
    level = logging.ERROR if status == "error" else logging.INFO
    log_event(
        logger,
        level,
        "workflow.step",
        step=step,
        status=status,
        detail=detail,
    )


def chain_step_observers(*observers: StepObserver) -> StepObserver:
    def observe(step: str, status: str, detail: str | None = None) -> None:
        for observer in observers:
            observer(step, status, detail)

    return observe
