"""Error types shared by services, providers and the HTTP layer."""

import openai


class StoryVidError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(StoryVidError):
    """A required input is missing or malformed."""

    status_code = 400


class NotFoundError(StoryVidError):
    """The requested resource does not exist."""

    status_code = 404


class UpstreamError(StoryVidError):
    """The external AI/TTS/image service failed or answered with garbage."""

    status_code = 502


class LLMResponseError(UpstreamError):
    """The model answered, but the answer could not be parsed."""


class InternalError(StoryVidError):
    """Unexpected failure; the message shown to clients stays generic."""

    status_code = 500


def upstream_error_from(error: Exception) -> UpstreamError:
    """Map an OpenAI SDK exception onto an UpstreamError with a useful status."""
    if isinstance(error, openai.AuthenticationError):
        return UpstreamError("Invalid OpenAI API key", status_code=401)
    if isinstance(error, openai.RateLimitError):
        return UpstreamError("Rate limit exceeded. Please try again later.", status_code=429)
    if isinstance(error, openai.BadRequestError):
        if getattr(error, "code", None) == "content_policy_violation":
            return UpstreamError(
                "Content policy violation. Please try a different prompt.",
                status_code=400,
            )
        return UpstreamError(f"Upstream rejected the request: {error}", status_code=502)
    if isinstance(error, openai.APITimeoutError):
        return UpstreamError("Upstream service timed out", status_code=504)
    if isinstance(error, openai.APIConnectionError):
        return UpstreamError("Could not reach upstream service", status_code=502)
    return UpstreamError(str(error) or type(error).__name__)
