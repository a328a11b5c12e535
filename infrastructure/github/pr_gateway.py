import logging
from pathlib import Path
from typing import Mapping

from domain.errors import PublishError
from domain.models import PublishedPullRequest, PullRequestRequest
from infrastructure.github.github_client import GitHubClient
from infrastructure.observability.logging_utils import log_event, safe_message
from infrastructure.repo.operations import run_capture


logger = logging.getLogger(__name__)

_COMMAND_NOT_FOUND_EXIT_CODE = 127


class GitHubApiPublisher:
    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    def publish(self, request: PullRequestRequest) -> PublishedPullRequest:
        pull_request = self.client.create_pr(
            head=request.head_branch,
            base=request.base_branch,
            title=request.title,
            body=request.body,
        )
        return PublishedPullRequest(url=str(pull_request["html_url"]))


class GhCliPublisher:
    """Opens the pull request with ``gh pr create`` in a child process.

    The child's exit status is kept on the raised PublishError so the CLI can
    exit with the same code ``gh`` did. ``base_env`` is the environment the
    child starts from; without it and without a token the child inherits ours.
    """

    def __init__(
        self,
        repository_directory: Path,
        *,
        github_token: str | None = None,
        base_env: Mapping[str, str] | None = None,
        executable: str = "gh",
    ) -> None:
        self.repository_directory = repository_directory
        self.github_token = github_token
        self.base_env = base_env
        self.executable = executable

    def _child_env(self) -> dict[str, str] | None:
        if self.base_env is None and not self.github_token:
            return None
        env = dict(self.base_env or {})
        if self.github_token:
            env["GH_TOKEN"] = self.github_token
        return env

    def publish(self, request: PullRequestRequest) -> PublishedPullRequest:
        command = [
            self.executable,
            "pr",
            "create",
            "--title",
            request.title,
            "--body",
            request.body,
            "--base",
            request.base_branch,
            "--head",
            request.head_branch,
        ]
        try:
            result = run_capture(command, cwd=self.repository_directory, env=self._child_env())
        except OSError as error:
            raise PublishError(
                f"Could not run '{self.executable}': {error}",
                exit_code=_COMMAND_NOT_FOUND_EXIT_CODE,
            ) from error

        if result.returncode != 0:
            details = safe_message(result.stderr.strip() or result.stdout.strip())
            log_event(
                logger,
                logging.ERROR,
                "github.cli.pr_create_failed",
                exit_code=result.returncode,
                details=details,
            )
            raise PublishError(
                f"gh pr create failed (exit_code={result.returncode})" + (f": {details}" if details else ""),
                details=details or None,
                exit_code=result.returncode,
            )

        url = result.stdout.strip().splitlines()[-1] if result.stdout.strip() else None
        log_event(logger, logging.INFO, "github.cli.pr_created", url=url)
        return PublishedPullRequest(url=url)
