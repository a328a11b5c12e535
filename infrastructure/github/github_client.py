import logging
from typing import Any

import requests
from jsonschema import ValidationError, validate

from domain.errors import PublishError
from infrastructure.observability.logging_utils import log_event, safe_message


logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

_PULL_REQUEST_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["number", "html_url"],
    "properties": {
        "number": {"type": "integer"},
        "html_url": {"type": "string", "minLength": 1},
    },
}


class GitHubClient:
    def __init__(self, *, token: str, owner: str, repo: str, api_url: str = GITHUB_API_URL) -> None:
        self.token = token
        self.owner = owner
        self.repo = repo
        self.base = f"{api_url.rstrip('/')}/repos/{self.owner}/{self.repo}"
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def create_pr(self, head: str, base: str, title: str, body: str) -> dict[str, Any]:
        log_event(logger, logging.INFO, "github.pr.create", head=head, base=base, title=title)
        payload = {"title": title, "body": body, "head": head, "base": base}
        try:
            response = self.session.post(f"{self.base}/pulls", json=payload)
        except requests.RequestException as error:
            raise PublishError(safe_message(f"GitHub PR creation request failed: {error}")) from error

        if not response.ok:
            error_details = response.text
            try:
                error_payload = response.json()
                api_message = error_payload.get("message", "")
                api_errors = error_payload.get("errors", "")
                error_details = f"{api_message} | errors={api_errors}"
            except (ValueError, AttributeError):
                pass
            safe_error_details = safe_message(error_details)
            log_event(
                logger,
                logging.ERROR,
                "github.pr.create_failed",
                status_code=response.status_code,
                details=safe_error_details,
            )
            raise PublishError(
                f"GitHub PR creation failed ({response.status_code}): {safe_error_details}",
                details=safe_error_details,
            )

        try:
            pull_request = response.json()
            validate(instance=pull_request, schema=_PULL_REQUEST_SCHEMA)
        except (ValueError, ValidationError) as error:
            raise PublishError(
                f"GitHub PR creation returned an unexpected response ({response.status_code})",
                details=safe_message(response.text),
            ) from error
        return pull_request
