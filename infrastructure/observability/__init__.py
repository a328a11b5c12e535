from infrastructure.observability.logging_utils import (
    configure_logging,
    log_event,
    register_sensitive_values,
    safe_message,
)
from infrastructure.observability.progress import ProgressStepObserver
from infrastructure.observability.workflow_observer import (
    chain_step_observers,
    observe_change_set,
    observe_workflow_step,
)

__all__ = [
    "configure_logging",
    "log_event",
    "register_sensitive_values",
    "safe_message",
    "ProgressStepObserver",
    "chain_step_observers",
    "observe_change_set",
    "observe_workflow_step",
]
