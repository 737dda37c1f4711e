"""Image service: illustration generation and background removal."""

import logging
import time
from typing import Any

import httpx

from ....errors import ValidationError
from ....media import background
from ....media.provider import MediaProvider

logger = logging.getLogger(__name__)

STYLE_MODIFIERS = {
    "modern-flat": (
        "in a modern flat design style, minimalist, clean geometric shapes, bold colors, "
        "simple forms, vector art style, 2D, no gradients, professional"
    ),
    "hand-drawn": (
        "in a hand-drawn sketch style, artistic, organic lines, pen and ink illustration, "
        "slightly rough edges, creative, whimsical, artisanal feel"
    ),
    "corporate": (
        "in a professional corporate style, polished, business-appropriate, clean and "
        "sophisticated, premium quality, trustworthy aesthetic, modern business illustration"
    ),
    "custom": "",
}

PROMPT_SUFFIX = (
    "High quality, detailed, centered composition, clean background, "
    "suitable for storyboard illustration."
)


def build_image_prompt(prompt: str, style: str, custom_style_description: str | None = None) -> str:
    """Append the style modifier and the storyboard framing to ``prompt``."""
    modifier = STYLE_MODIFIERS.get(style, "")
    if style == "custom" and custom_style_description:
        modifier = custom_style_description
    return f"{prompt}, {modifier}. {PROMPT_SUFFIX}"


class ImageService:
    """Service for storyboard illustrations."""

    def __init__(self, media: MediaProvider, http_client: httpx.Client | None = None):
        """Initialize the image service.

        Args:
            media: Provider for image generation.
            http_client: Client used to download source images; a one-off
                request is made when None.
        """
        self.media = media
        self.http_client = http_client

    def generate_image(
        self,
        prompt: str | None,
        style: str | None,
        custom_style_description: str | None = None,
        size: str | None = None,
        quality: str | None = None,
    ) -> dict[str, Any]:
        if not prompt or not style:
            raise ValidationError("Prompt and style are required")

        full_prompt = build_image_prompt(prompt, style, custom_style_description)
        logger.info("Generating image with prompt: %s", full_prompt)
        image_url = self.media.generate_image(full_prompt, size=size, quality=quality)
        return {
            "imageUrl": image_url,
            "prompt": full_prompt,
            "originalPrompt": prompt,
            "style": style,
        }

    def remove_background(
        self,
        image_url: str | None,
        method: str | None,
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make the background of an image transparent.

        Args:
            image_url: http(s) URL or data URI of the source image.
            method: One of ``background.METHODS``.
            options: camelCase removal options; ``maskPath`` is required
                for the manual method.

        Returns:
            The PNG result as a data URI with timing information.
        """
        if not image_url or not method:
            raise ValidationError("Missing required fields: imageUrl and method")
        if method not in background.METHODS:
            raise ValidationError("Unsupported background removal method")

        options = options or {}
        started = time.monotonic()

        image = background.open_image(background.fetch_image_bytes(image_url, self.http_client))
        mask = None
        if method == "manual":
            mask_path = options.get("maskPath")
            if not mask_path:
                raise ValidationError("Manual mask requires maskPath")
            mask = background.open_image(background.fetch_image_bytes(mask_path, self.http_client))

        result = background.remove_background(image, method, options, mask=mask)
        elapsed_ms = int((time.monotonic() - started) * 1000)
        logger.info("Removed background with %s in %d ms", method, elapsed_ms)

        return {
            "transparentImageUrl": background.to_png_data_uri(result),
            "originalImageUrl": image_url,
            "method": method,
            "processingTime": elapsed_ms,
        }
