from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from application.pr_flow import PullRequestFlowConfig, PullRequestFlowDependencies
from domain.models import PublishedPullRequest, PullRequestRequest
from domain.prompt import build_description_prompt


@dataclass
class FakeRepository:
    dirty: bool = False
    branch: str = "feature/login"
    has_remote: bool = True
    diff_text: str = "diff --git a/x b/x\n+print('x')\n"
    commit_subjects: tuple[str, ...] = ("fix bug", "add test")
    push_error: Exception | None = None
    calls: list[tuple[Any, ...]] = field(default_factory=list)

    def is_working_tree_clean(self, repo_dir: Path) -> bool:
        self.calls.append(("status", repo_dir))
        return not self.dirty

    def get_current_branch(self, repo_dir: Path) -> str:
        self.calls.append(("rev-parse", repo_dir))
        return self.branch

    def remote_branch_exists(self, branch: str, repo_dir: Path, remote: str) -> bool:
        self.calls.append(("ls-remote", branch, remote))
        return self.has_remote

    def push_branch(self, branch: str, repo_dir: Path, remote: str) -> None:
        self.calls.append(("push", branch, remote))
        if self.push_error is not None:
            raise self.push_error
        self.has_remote = True

    def get_diff(self, base_ref: str, repo_dir: Path) -> str:
        self.calls.append(("diff", base_ref))
        return self.diff_text

    def get_commit_subjects(self, base_ref: str, repo_dir: Path) -> tuple[str, ...]:
        self.calls.append(("log", base_ref))
        return self.commit_subjects

    def call_names(self) -> list[str]:
        return [call[0] for call in self.calls]


@dataclass
class FakeAIProvider:
    completion: str = "Summary: ..."
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    def generate_description(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.completion


@dataclass
class FakePublisher:
    url: str | None = "https://github.com/owner/repo/pull/7"
    error: Exception | None = None
    requests: list[PullRequestRequest] = field(default_factory=list)

    def publish(self, request: PullRequestRequest) -> PublishedPullRequest:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return PublishedPullRequest(url=self.url)


@dataclass
class FlowHarness:
    repository: FakeRepository = field(default_factory=FakeRepository)
    ai_provider: FakeAIProvider = field(default_factory=FakeAIProvider)
    publisher: FakePublisher = field(default_factory=FakePublisher)
    observed_steps: list[tuple[str, str, str | None]] = field(default_factory=list)
    linked_issue: str | None = None

    def observe_step(self, step: str, status: str, detail: str | None = None) -> None:
        self.observed_steps.append((step, status, detail))

    def config(self, **overrides: Any) -> PullRequestFlowConfig:
        config = PullRequestFlowConfig(repository_directory=Path("/tmp/repo"))
        return replace(config, **overrides)

    def dependencies(self, **overrides: Any) -> PullRequestFlowDependencies:
        dependencies = PullRequestFlowDependencies(
            is_working_tree_clean=self.repository.is_working_tree_clean,
            get_current_branch=self.repository.get_current_branch,
            remote_branch_exists=self.repository.remote_branch_exists,
            push_branch=self.repository.push_branch,
            get_diff=self.repository.get_diff,
            get_commit_subjects=self.repository.get_commit_subjects,
            resolve_linked_issue=lambda _: self.linked_issue,
            build_prompt=build_description_prompt,
            ai_provider=self.ai_provider,
            publisher=self.publisher,
            observe_step=self.observe_step,
        )
        return replace(dependencies, **overrides)
