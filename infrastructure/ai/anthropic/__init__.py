from infrastructure.ai.anthropic.adapter import AnthropicProvider

__all__ = ["AnthropicProvider"]
