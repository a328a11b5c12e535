from application.ports.ai_provider import AIProvider
from application.ports.pr_publisher import PullRequestPublisher

__all__ = ["AIProvider", "PullRequestPublisher"]
