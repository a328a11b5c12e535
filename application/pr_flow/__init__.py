from application.pr_flow.contracts import (
    PullRequestFlowConfig,
    PullRequestFlowDependencies,
    PullRequestFlowResult,
)
from application.pr_flow.use_case import run_pr_flow

__all__ = [
    "PullRequestFlowConfig",
    "PullRequestFlowDependencies",
    "PullRequestFlowResult",
    "run_pr_flow",
]
