from dataclasses import dataclass
from typing import Any

from openai import OpenAI, OpenAIError

from application.ports import AIProvider
from domain.errors import GenerationError


DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 120.0


@dataclass(frozen=True)
class OpenAIProvider(AIProvider):
    client: OpenAI
    model: str = DEFAULT_MODEL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_settings(
        cls,
        *,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> "OpenAIProvider":
        client = OpenAI(api_key=api_key, timeout=timeout_seconds, max_retries=0)
        return cls(client=client, model=model, timeout_seconds=timeout_seconds)

    def generate_description(self, prompt: str) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                timeout=self.timeout_seconds,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIError as error:
            raise GenerationError(f"OpenAI completion failed: {error}") from error
        return self._extract_content(response)

    def _extract_content(self, response: Any) -> str:
        if not response.choices:
            raise GenerationError("OpenAI response did not contain choices")

        message = response.choices[0].message
        content = message.content if message else None
        if not isinstance(content, str):
            raise GenerationError("OpenAI response did not contain message content")
        return content
