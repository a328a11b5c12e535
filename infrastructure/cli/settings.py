"""Settings for one CLI run, read once from the environment.

Everything downstream receives these values explicitly; nothing below the CLI
layer looks at ``os.environ``.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from domain.errors import ConfigurationError
from domain.models import DEFAULT_PR_TITLE
from infrastructure.ai.anthropic.adapter import DEFAULT_MAX_TOKENS as ANTHROPIC_DEFAULT_MAX_TOKENS
from infrastructure.ai.anthropic.adapter import DEFAULT_MODEL as ANTHROPIC_DEFAULT_MODEL
from infrastructure.ai.openai.adapter import DEFAULT_MODEL as OPENAI_DEFAULT_MODEL
from infrastructure.ai.openai.adapter import DEFAULT_TIMEOUT_SECONDS as OPENAI_DEFAULT_TIMEOUT_SECONDS


_DEFAULT_AI_PROVIDER = "anthropic"
_DEFAULT_PUBLISHER = "gh"
_SUPPORTED_PUBLISHERS = ("gh", "api")
_PROVIDER_API_KEY_ENV = {
    "anthropic": ("ANTHROPIC_API_KEY", "ANTHROPIC_KEY"),
    "openai": ("OPENAI_API_KEY",),
}
_PROVIDER_DEFAULT_MODEL = {
    "anthropic": ("ANTHROPIC_MODEL", ANTHROPIC_DEFAULT_MODEL),
    "openai": ("OPENAI_MODEL", OPENAI_DEFAULT_MODEL),
}
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class CliSettings:
    ai_provider: str
    ai_api_key: str = field(repr=False)
    ai_model: str
    repository_directory: Path
    ai_max_tokens: int = ANTHROPIC_DEFAULT_MAX_TOKENS
    ai_timeout_seconds: float = OPENAI_DEFAULT_TIMEOUT_SECONDS
    publisher: str = _DEFAULT_PUBLISHER
    github_token: str | None = field(default=None, repr=False)
    github_owner: str | None = None
    github_repo: str | None = None
    base_branch: str = "master"
    base_ref: str = "origin/master"
    remote: str = "origin"
    title: str = DEFAULT_PR_TITLE
    dry_run: bool = False
    progress: bool | None = None
    log_level: str = "WARNING"
    # Base environment for child processes such as gh.
    environment: Mapping[str, str] = field(default_factory=dict, repr=False)


def _optional_env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name, "").strip()
    return value or None


def _first_env(environ: Mapping[str, str], names: tuple[str, ...]) -> str | None:
    for name in names:
        value = _optional_env(environ, name)
        if value:
            return value
    return None


def _parse_bool(name: str, value: str | None, default: bool | None) -> bool | None:
    if value is None or value.lower() == "auto":
        return default
    normalized = value.lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value for {name}: '{value}'")


def _parse_number(name: str, value: str | None, default: float, cast: type) -> float:
    if value is None:
        return default
    try:
        parsed = cast(value)
    except ValueError as error:
        raise ConfigurationError(f"Invalid numeric value for {name}: '{value}'") from error
    if parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return parsed


def resolve_ai_provider_name(environ: Mapping[str, str]) -> str:
    provider = (_optional_env(environ, "AI_PROVIDER") or _DEFAULT_AI_PROVIDER).lower()
    if provider not in _PROVIDER_API_KEY_ENV:
        supported = ", ".join(sorted(_PROVIDER_API_KEY_ENV))
        raise ConfigurationError(f"Invalid AI_PROVIDER '{provider}'. Supported values: {supported}")
    return provider


def load_settings_from_env(
    environ: Mapping[str, str] | None = None,
    *,
    repository_directory: Path | None = None,
) -> CliSettings:
    environ = os.environ if environ is None else environ

    ai_provider = resolve_ai_provider_name(environ)
    key_names = _PROVIDER_API_KEY_ENV[ai_provider]
    ai_api_key = _first_env(environ, key_names)
    if not ai_api_key:
        raise ConfigurationError(f"Missing required environment variable: {key_names[0]}")
    model_env, default_model = _PROVIDER_DEFAULT_MODEL[ai_provider]

    publisher = (_optional_env(environ, "PR_PUBLISHER") or _DEFAULT_PUBLISHER).lower()
    if publisher not in _SUPPORTED_PUBLISHERS:
        supported = ", ".join(_SUPPORTED_PUBLISHERS)
        raise ConfigurationError(f"Invalid PR_PUBLISHER '{publisher}'. Supported values: {supported}")
    github_token = _optional_env(environ, "GITHUB_TOKEN")
    if publisher == "api" and not github_token:
        raise ConfigurationError("Missing required environment variable: GITHUB_TOKEN")

    log_level = (_optional_env(environ, "LOG_LEVEL") or "WARNING").upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"Invalid LOG_LEVEL '{log_level}'. Supported values: {', '.join(_LOG_LEVELS)}")

    remote = _optional_env(environ, "PR_REMOTE") or "origin"
    base_branch = _optional_env(environ, "PR_BASE_BRANCH") or "master"

    return CliSettings(
        ai_provider=ai_provider,
        ai_api_key=ai_api_key,
        ai_model=_optional_env(environ, model_env) or default_model,
        ai_max_tokens=int(
            _parse_number(
                "ANTHROPIC_MAX_TOKENS",
                _optional_env(environ, "ANTHROPIC_MAX_TOKENS"),
                ANTHROPIC_DEFAULT_MAX_TOKENS,
                int,
            )
        ),
        ai_timeout_seconds=_parse_number(
            "OPENAI_TIMEOUT_SECONDS",
            _optional_env(environ, "OPENAI_TIMEOUT_SECONDS"),
            OPENAI_DEFAULT_TIMEOUT_SECONDS,
            float,
        ),
        repository_directory=repository_directory or Path.cwd(),
        publisher=publisher,
        github_token=github_token,
        github_owner=_optional_env(environ, "GH_OWNER"),
        github_repo=_optional_env(environ, "GH_REPO"),
        base_branch=base_branch,
        base_ref=_optional_env(environ, "PR_BASE_REF") or f"{remote}/{base_branch}",
        remote=remote,
        title=_optional_env(environ, "PR_TITLE") or DEFAULT_PR_TITLE,
        dry_run=bool(_parse_bool("PR_DRY_RUN", _optional_env(environ, "PR_DRY_RUN"), False)),
        progress=_parse_bool("PR_PROGRESS", _optional_env(environ, "PR_PROGRESS"), None),
        log_level=log_level,
        environment=dict(environ),
    )
