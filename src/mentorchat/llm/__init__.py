from .base import CompletionError, LLMProvider
from .factory import create_llm_provider
from .models import ChatMessage, LLMResponse
from .providers import DeepSeekProvider, OpenAIProvider

__all__ = [
    "CompletionError",
    "LLMProvider",
    "create_llm_provider",
    "ChatMessage",
    "LLMResponse",
    "DeepSeekProvider",
    "OpenAIProvider",
]
