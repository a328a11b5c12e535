from infrastructure.ai.openai.adapter import OpenAIProvider

__all__ = ["OpenAIProvider"]
