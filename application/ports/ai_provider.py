from typing import Protocol


class AIProvider(Protocol):
    def generate_description(self, prompt: str) -> str:
        """Return the completion text for a pull request description prompt, verbatim."""
