import re

from domain.errors import ConfigurationError


# git@github.com:owner/repo.git, ssh://git@github.com/owner/repo, https://github.com/owner/repo.git
_REMOTE_URL_PATTERN = re.compile(r"[:/](?P<owner>[^/:]+)/(?P<repo>[^/]+?)(?:\.git)?/?$")


def parse_repository_slug(remote_url: str) -> tuple[str, str]:
    match = _REMOTE_URL_PATTERN.search(remote_url.strip())
    if not match:
        raise ConfigurationError(
            f"Could not determine owner/repo from remote URL '{remote_url}'; set GH_OWNER and GH_REPO"
        )
    return match.group("owner"), match.group("repo")
