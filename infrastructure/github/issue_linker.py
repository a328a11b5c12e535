from domain.models import LinkedIssue


def resolve_linked_issue(branch: str) -> LinkedIssue:
    # TODO: look up the issue referenced by the branch name or commit subjects via the issues API.
    return None
