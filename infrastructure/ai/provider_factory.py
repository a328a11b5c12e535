import logging
from dataclasses import dataclass, field

from application.ports import AIProvider
from domain.errors import ConfigurationError
from infrastructure.ai.anthropic import AnthropicProvider
from infrastructure.ai.openai import OpenAIProvider
from infrastructure.cli.settings import CliSettings
from infrastructure.observability.logging_utils import log_event


logger = logging.getLogger(__name__)

SUPPORTED_AI_PROVIDERS = ("anthropic", "openai")


@dataclass(frozen=True)
class AIProviderRuntime:
    provider: str
    model: str
    adapter: AIProvider = field(repr=False)


def build_ai_provider_runtime(settings: CliSettings) -> AIProviderRuntime:
    provider = settings.ai_provider
    if provider == "anthropic":
        adapter: AIProvider = AnthropicProvider.from_settings(
            api_key=settings.ai_api_key,
            model=settings.ai_model,
            max_tokens=settings.ai_max_tokens,
        )
    elif provider == "openai":
        adapter = OpenAIProvider.from_settings(
            api_key=settings.ai_api_key,
            model=settings.ai_model,
            timeout_seconds=settings.ai_timeout_seconds,
        )
    else:
        supported = ", ".join(SUPPORTED_AI_PROVIDERS)
        raise ConfigurationError(f"Invalid AI_PROVIDER '{provider}'. Supported values: {supported}")

    log_event(logger, logging.INFO, "workflow.ai.provider.selected", provider=provider, model=settings.ai_model)
    return AIProviderRuntime(provider=provider, model=settings.ai_model, adapter=adapter)
