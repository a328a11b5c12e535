import logging
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

from domain.commit_log import parse_commit_subjects
from domain.errors import PublishError, RepositoryAccessError
from domain.models import RepositoryState
from infrastructure.observability.logging_utils import log_event, safe_message


logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


def _execute_command(
    command: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        command,
        cwd=cwd,
        env=dict(env) if env is not None else None,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
    )


def _log_failed_output(result: subprocess.CompletedProcess[str]) -> None:
    stdout = safe_message(result.stdout.strip()) if result.stdout else ""
    stderr = safe_message(result.stderr.strip()) if result.stderr else ""
    if stdout:
        log_event(logger, logging.ERROR, "repo.command.stdout", output=stdout)
    if stderr:
        log_event(logger, logging.ERROR, "repo.command.stderr", output=stderr)


def run_capture(
    command: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    log_event(
        logger,
        logging.INFO,
        "repo.command.run_capture",
        command=list(command),
        cwd=str(cwd) if cwd else None,
    )
    return _execute_command(command, cwd=cwd, env=env)


def _git_query(query: str, arguments: Sequence[str], repo_dir: Path) -> str:
    command = ["git", *arguments]
    try:
        result = run_capture(command, cwd=repo_dir)
    except OSError as error:
        raise RepositoryAccessError(f"git {query} could not be executed: {error}") from error
    if result.returncode != 0:
        _log_failed_output(result)
        detail = safe_message(result.stderr.strip()) if result.stderr else ""
        raise RepositoryAccessError(
            f"git {query} failed (exit_code={result.returncode})" + (f": {detail}" if detail else "")
        )
    return result.stdout


def is_working_tree_clean(repo_dir: Path) -> bool:
    return not _git_query("status", ["status", "--porcelain"], repo_dir).strip()


def get_current_branch(repo_dir: Path) -> str:
    branch = _git_query("rev-parse", ["rev-parse", "--abbrev-ref", "HEAD"], repo_dir).strip()
    if not branch:
        raise RepositoryAccessError("git rev-parse returned an empty branch name")
    return branch


def remote_branch_exists(branch: str, repo_dir: Path, remote: str = DEFAULT_REMOTE) -> bool:
    # --exit-code makes ls-remote return 2 when no matching ref exists.
    try:
        command_result = run_capture(
            ["git", "ls-remote", "--exit-code", "--heads", remote, branch],
            cwd=repo_dir,
        )
    except OSError as error:
        raise RepositoryAccessError(f"git ls-remote could not be executed: {error}") from error
    return command_result.returncode == 0


def get_diff(base_ref: str, repo_dir: Path) -> str:
    return _git_query("diff", ["diff", base_ref], repo_dir)


def get_commit_subjects(base_ref: str, repo_dir: Path) -> tuple[str, ...]:
    log_output = _git_query("log", ["log", f"{base_ref}..HEAD", "--pretty=format:%s"], repo_dir)
    return parse_commit_subjects(log_output)


def get_remote_url(repo_dir: Path, remote: str = DEFAULT_REMOTE) -> str:
    return _git_query("remote get-url", ["remote", "get-url", remote], repo_dir).strip()


def read_repository_state(repo_dir: Path, remote: str = DEFAULT_REMOTE) -> RepositoryState:
    current_branch = get_current_branch(repo_dir)
    return RepositoryState(
        is_clean=is_working_tree_clean(repo_dir),
        current_branch=current_branch,
        has_remote_branch=remote_branch_exists(current_branch, repo_dir, remote),
    )


def push_branch(branch: str, repo_dir: Path, remote: str = DEFAULT_REMOTE) -> None:
    command = ["git", "push", remote, branch]
    log_event(logger, logging.INFO, "repo.command.run", command=command, cwd=str(repo_dir))
    try:
        result = _execute_command(command, cwd=repo_dir)
    except OSError as error:
        raise PublishError(f"git push could not be executed: {error}") from error
    if result.returncode != 0:
        _log_failed_output(result)
        details = safe_message(result.stderr.strip()) if result.stderr else None
        raise PublishError(
            f"Failed to push '{branch}' to {remote} (exit_code={result.returncode}). "
            f"Please ensure your branch is up to date with {remote}.",
            details=details,
        )
