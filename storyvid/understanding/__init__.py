"""Language model access for the storyboard assistant."""

from .llm_provider import (
    LLMProvider,
    MockLLMProvider,
    OpenAILLMProvider,
    get_llm_provider,
    parse_json_response,
)

__all__ = [
    "LLMProvider",
    "MockLLMProvider",
    "OpenAILLMProvider",
    "get_llm_provider",
    "parse_json_response",
]
