"""Terminal progress display for the pull request flow.

Each stage gets a spinner line that is marked done or failed once the stage
resolves. The display only renders; it never decides anything about the run.
"""

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn


STAGE_LABELS: dict[str, str] = {
    "verify_clean": "Checking working tree",
    "ensure_remote": "Checking remote",
    "collect_diff": "Getting git diff",
    "collect_commits": "Getting commit messages",
    "resolve_issue": "Checking linked issue",
    "generate_description": "Generating PR description",
    "publish": "Creating pull request",
}


class ProgressStepObserver:
    def __init__(self, console: Console | None = None) -> None:
        self.progress = Progress(
            SpinnerColumn(style="green"),
            TextColumn("{task.description}"),
            console=console or Console(stderr=True),
            transient=False,
        )
        self._task_ids: dict[str, TaskID] = {}

    def __enter__(self) -> "ProgressStepObserver":
        self.progress.start()
        for stage, label in STAGE_LABELS.items():
            self._task_ids[stage] = self.progress.add_task(label, total=1, start=False)
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.progress.stop()

    def __call__(self, step: str, status: str, detail: str | None = None) -> None:
        task_id = self._task_ids.get(step)
        if task_id is None:
            return
        label = STAGE_LABELS[step]
        if status == "start":
            self.progress.start_task(task_id)
        elif status == "success":
            suffix = "Skipped" if detail and detail.startswith("skipped") else "Done"
            self.progress.update(task_id, completed=1, description=f"[green]{label} {suffix}")
        elif status == "error":
            self.progress.update(task_id, completed=1, description=f"[red]{label} Failed")
