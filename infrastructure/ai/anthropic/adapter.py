from dataclasses import dataclass

from anthropic import Anthropic, APIError

from application.ports import AIProvider
from domain.errors import GenerationError


DEFAULT_MODEL = "claude-3-haiku-20240307"
DEFAULT_MAX_TOKENS = 4096
# Human-turn delimiter of the Claude prompt format; generation stops if the model starts a new turn.
HUMAN_TURN_DELIMITER = "\n\nHuman:"


@dataclass(frozen=True)
class AnthropicProvider(AIProvider):
    client: Anthropic
    model: str = DEFAULT_MODEL
    max_tokens: int = DEFAULT_MAX_TOKENS

    @classmethod
    def from_settings(
        cls,
        *,
        api_key: str,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ) -> "AnthropicProvider":
        # No retries: a failed completion aborts the run.
        client = Anthropic(api_key=api_key, max_retries=0)
        return cls(client=client, model=model, max_tokens=max_tokens)

    def generate_description(self, prompt: str) -> str:
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                stop_sequences=[HUMAN_TURN_DELIMITER],
                stream=False,
                messages=[{"role": "user", "content": prompt}],
            )
        except APIError as error:
            raise GenerationError(f"Anthropic completion failed: {error}") from error

        text_parts = [
            block.text
            for block in response.content
            if getattr(block, "type", None) == "text"
        ]
        if not text_parts:
            raise GenerationError("Anthropic response did not contain text content")
        return "".join(text_parts)
