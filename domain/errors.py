DIRTY_WORKING_TREE_MESSAGE = (
    "There are uncommitted changes. Please commit or stash them before proceeding."
)
GENERIC_FAILURE_EXIT_CODE = 1


class PullRequestAutomationError(RuntimeError):
    """Base class for failures that abort the pull request flow."""

    def __init__(self, message: str, *, stage: str | None = None, exit_code: int = GENERIC_FAILURE_EXIT_CODE) -> None:
        super().__init__(message)
        self.stage = stage
        self.exit_code = exit_code


class RepositoryAccessError(PullRequestAutomationError):
    """A git query failed or produced output that could not be read."""


class UserVisibleAbort(PullRequestAutomationError):
    """Intentional hard stop with a message meant for the user (dirty working tree)."""


class PublishError(PullRequestAutomationError):
    """Pushing the branch or creating the pull request failed."""

    def __init__(
        self,
        message: str,
        *,
        details: str | None = None,
        stage: str | None = None,
        exit_code: int = GENERIC_FAILURE_EXIT_CODE,
    ) -> None:
        super().__init__(message, stage=stage, exit_code=exit_code)
        self.details = details


class GenerationError(PullRequestAutomationError):
    """The completion endpoint failed or returned no usable content."""


class ConfigurationError(PullRequestAutomationError):
    """A required setting or credential is missing or invalid."""


def dirty_working_tree_abort() -> UserVisibleAbort:
    return UserVisibleAbort(DIRTY_WORKING_TREE_MESSAGE, exit_code=1)
