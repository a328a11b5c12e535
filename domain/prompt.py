from typing import Sequence

from domain.models import LinkedIssue


_PROMPT_TEMPLATE = """Generate a pull request description based on the following information:
Diff: {diff_text}
Commit messages: {commit_messages}
Linked issue: {linked_issue!r}
Please summarize the changes, their purpose, and any potential impact."""


def build_description_prompt(
    diff_text: str,
    commit_subjects: Sequence[str],
    linked_issue: LinkedIssue,
) -> str:
    # The issue is rendered with repr so an absent issue still shows up as "None".
    return _PROMPT_TEMPLATE.format(
        diff_text=diff_text,
        commit_messages="\n".join(commit_subjects),
        linked_issue=linked_issue,
    )
