"""LLM Provider abstraction and implementations."""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

import openai

from ..config import Config, LLMConfig
from ..errors import LLMResponseError, UpstreamError, upstream_error_from

logger = logging.getLogger(__name__)


def build_openai_client(api_key: str | None) -> "openai.OpenAI":
    """Create an OpenAI client, failing with an UpstreamError when no key is set."""
    try:
        return openai.OpenAI(api_key=api_key)
    except openai.OpenAIError as e:
        raise UpstreamError("OpenAI API key not configured", status_code=500) from e


def parse_json_response(response: str) -> Any:
    """Parse JSON from a model response.

    Handles responses that wrap the payload in markdown code blocks
    or surround it with prose.

    Args:
        response: Raw response text

    Returns:
        Parsed JSON value (object or array)

    Raises:
        LLMResponseError: If no JSON could be parsed
    """
    text = response.strip()

    # Try to extract JSON from markdown code blocks
    json_block_pattern = r"```(?:json)?\s*([\s\S]*?)```"
    matches = re.findall(json_block_pattern, text)
    if matches:
        text = matches[0].strip()

    # Try to find JSON object or array
    json_pattern = r"(\{[\s\S]*\}|\[[\s\S]*\])"
    json_match = re.search(json_pattern, text)
    if json_match:
        text = json_match.group(1)

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise LLMResponseError(f"Failed to parse JSON response: {e}")


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    def __init__(self, config: LLMConfig):
        self.config = config

    @abstractmethod
    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a response from the LLM.

        Args:
            prompt: The user prompt
            system_prompt: Optional system prompt
            temperature: Optional override of the configured temperature
            max_tokens: Optional override of the configured token limit

        Returns:
            The generated text response
        """
        pass

    def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Any:
        """Generate a JSON response from the LLM.

        Returns:
            Parsed JSON response

        Raises:
            LLMResponseError: If the response is not valid JSON
        """
        response = self.generate(
            prompt,
            system_prompt=system_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return parse_json_response(response)


class MockLLMProvider(LLMProvider):
    """Mock LLM provider that returns canned responses for testing.

    Responses are picked by matching keywords in the prompt. Tests can
    pass ``responses`` to override or add patterns; a value that is an
    exception instance is raised instead of returned.
    """

    def __init__(
        self,
        config: LLMConfig | None = None,
        responses: dict[str, Any] | None = None,
    ):
        super().__init__(config or LLMConfig(provider="mock"))
        self.responses = responses or {}
        self.prompts: list[str] = []

    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Return the canned payload for the prompt, serialized."""
        payload = self._lookup(prompt)
        if isinstance(payload, str):
            return payload
        return json.dumps(payload)

    def _lookup(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        prompt_lower = prompt.lower()

        for keyword, payload in self.responses.items():
            if keyword.lower() in prompt_lower:
                if isinstance(payload, Exception):
                    raise payload
                return payload

        # Pattern matching order matters: scene generation prompts mention
        # "script", so they are checked before script improvement.
        if "break it down into storyboard scenes" in prompt_lower:
            return self._mock_scenes()
        if "improve this video script" in prompt_lower:
            return self._mock_script_improvement()
        if "translate" in prompt_lower:
            return {
                "translatedText": "Texto traducido",
                "confidence": 0.9,
                "culturalAdaptations": [],
            }
        if "transitions between" in prompt_lower:
            return {"suggestions": []}
        return {}

    def _mock_scenes(self) -> dict[str, Any]:
        return {
            "scenes": [
                {
                    "title": "The Problem",
                    "description": "A cluttered desk full of paper.",
                    "voiceover": "Every team drowns in paperwork.",
                    "keywords": ["paperwork", "stress"],
                    "duration": 5,
                    "suggestedIcons": ["File", "Folder", "AlertCircle"],
                },
                {
                    "title": "The Solution",
                    "description": "One app replaces the pile.",
                    "voiceover": "Our app keeps everything in one place.",
                    "keywords": ["app", "organization"],
                    "duration": 6,
                    "suggestedIcons": ["Smartphone", "Check"],
                },
            ]
        }

    def _mock_script_improvement(self) -> dict[str, Any]:
        return {
            "clarityScore": 80,
            "engagementScore": 75,
            "pacingScore": 70,
            "overallScore": 75,
            "improvements": [],
            "improvedScript": "An improved script.",
            "keyChanges": [],
        }


class OpenAILLMProvider(LLMProvider):
    """LLM provider backed by the OpenAI chat completions API."""

    def __init__(
        self,
        config: LLMConfig,
        api_key: str | None = None,
        client: "openai.OpenAI | None" = None,
    ):
        """Initialize the OpenAI provider.

        Args:
            config: LLM configuration
            api_key: OpenAI API key (falls back to the SDK's environment lookup)
            client: Pre-built client, mainly for tests
        """
        super().__init__(config)
        self._api_key = api_key or config.api_key
        self._client = client

    @property
    def client(self) -> "openai.OpenAI":
        """Lazy-init OpenAI client."""
        if self._client is None:
            self._client = build_openai_client(self._api_key)
        return self._client

    def generate(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        return self._complete(prompt, system_prompt, temperature, max_tokens, json_mode=False)

    def generate_json(
        self,
        prompt: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> Any:
        json_prompt = f"{prompt}\n\nRespond with valid JSON only. No markdown code blocks."
        response = self._complete(
            json_prompt, system_prompt, temperature, max_tokens, json_mode=True
        )
        return parse_json_response(response)

    def _complete(
        self,
        prompt: str,
        system_prompt: str | None,
        temperature: float | None,
        max_tokens: int | None,
        json_mode: bool,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs: dict[str, Any] = {
            "model": self.config.model,
            "messages": messages,
            "temperature": self.config.temperature if temperature is None else temperature,
            "max_tokens": max_tokens or self.config.max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = self.client.chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            logger.warning("Chat completion failed: %s", e)
            raise upstream_error_from(e) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise LLMResponseError("No response from AI")
        return content


def get_llm_provider(config: Config | None = None) -> LLMProvider:
    """Get the appropriate LLM provider based on configuration.

    Args:
        config: Configuration object. If None, loads default config.

    Returns:
        An LLM provider instance.

    Raises:
        ValueError: If provider name is not recognized.
    """
    if config is None:
        from ..config import load_config

        config = load_config()

    provider_name = config.llm.provider.lower()

    if provider_name == "mock":
        return MockLLMProvider(config.llm)
    elif provider_name == "openai":
        return OpenAILLMProvider(config.llm, api_key=config.openai_api_key)
    else:
        raise ValueError(f"Unknown LLM provider: {provider_name}")
