from typing import Protocol

from domain.models import PublishedPullRequest, PullRequestRequest


class PullRequestPublisher(Protocol):
    def publish(self, request: PullRequestRequest) -> PublishedPullRequest:
        """Open the pull request on the hosting platform or raise PublishError."""
