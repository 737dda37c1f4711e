"""Configuration loading and management."""

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """LLM provider configuration."""

    provider: str = "openai"
    model: str = "gpt-4o-mini"
    max_tokens: int = 4000
    temperature: float = 0.7
    api_key: str | None = None


class TTSConfig(BaseModel):
    """Text-to-speech and transcription configuration."""

    provider: str = "openai"
    model: str = "tts-1"
    sync_model: str = "tts-1-hd"
    voice: str = "alloy"
    transcription_model: str = "whisper-1"
    words_per_minute: int = 150


class ImageConfig(BaseModel):
    """Image generation configuration."""

    provider: str = "openai"
    model: str = "dall-e-3"
    size: str = "1024x1024"
    quality: str = "standard"


class RenderConfig(BaseModel):
    """Render job tracker configuration."""

    max_workers: int = 8
    estimated_duration_seconds: int = 120
    # Multiplier applied to every phase delay; 0 runs the pipeline instantly
    phase_delay_scale: float = 1.0
    output_url_prefix: str = "/videos"
    job_ttl_seconds: int | None = 3600


class Config(BaseModel):
    """Main application configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    tts: TTSConfig = Field(default_factory=TTSConfig)
    image: ImageConfig = Field(default_factory=ImageConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f)

        if data is None:
            return cls()

        return cls(**data)

    def to_yaml(self, path: Path | str) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(exclude={"llm": {"api_key"}})
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False)

    @property
    def openai_api_key(self) -> str | None:
        """API key for OpenAI-backed providers (config first, then environment)."""
        return self.llm.api_key or os.getenv("OPENAI_API_KEY")


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from file or use defaults.

    Also loads a ``.env`` file from the working directory so that
    ``OPENAI_API_KEY`` can live next to ``config.yaml``.
    """
    load_dotenv(Path.cwd() / ".env")

    if config_path is None:
        # Look for config.yaml in current directory or project root
        candidates = [Path("config.yaml"), Path(__file__).parent.parent / "config.yaml"]
        for candidate in candidates:
            if candidate.exists():
                config_path = candidate
                break

    if config_path is not None:
        return Config.from_yaml(config_path)

    return Config()
