"""Background removal for storyboard illustrations.

All routines take a Pillow image and return a new RGBA image whose
background pixels have alpha 0. Colour distance is the Euclidean
distance between RGB triples.
"""

import base64
import binascii
import io
import re
from typing import Any

import httpx
import numpy as np
from PIL import Image, ImageFilter, UnidentifiedImageError

from ..errors import UpstreamError, ValidationError

METHODS = ("color-based", "edge-based", "ai-based", "manual")

DEFAULT_TARGET_COLOR = "#FFFFFF"
DEFAULT_TOLERANCE = 30
DEFAULT_EDGE_THRESHOLD = 50
AI_TOLERANCE = 40
# Fraction of the image width sampled on each side as background
BORDER_FRACTION = 0.1

_HEX_COLOR = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.IGNORECASE)
_DATA_URI = re.compile(r"^data:(?P<mime>[\w/+.-]*)?(?P<b64>;base64)?,(?P<data>.*)$", re.DOTALL)


def hex_to_rgb(value: str) -> tuple[int, int, int] | None:
    """Convert ``#RRGGBB`` (hash optional) to an RGB tuple, or None if malformed."""
    match = _HEX_COLOR.match(value or "")
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def decode_data_uri(uri: str) -> bytes:
    """Return the payload of a ``data:`` URI."""
    match = _DATA_URI.match(uri)
    if not match:
        raise ValidationError("Malformed data URI")
    data = match.group("data")
    if not match.group("b64"):
        return data.encode()
    try:
        return base64.b64decode(data, validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Invalid base64 payload: {e}")


def fetch_image_bytes(source: str, client: httpx.Client | None = None) -> bytes:
    """Read image bytes from a data URI or an http(s) URL."""
    if source.startswith("data:"):
        return decode_data_uri(source)
    if not source.startswith(("http://", "https://")):
        raise ValidationError("Image must be an http(s) URL or a data URI")

    try:
        if client is not None:
            response = client.get(source)
        else:
            response = httpx.get(source, follow_redirects=True, timeout=30.0)
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise UpstreamError(f"Failed to download image: {e}")
    return response.content


def open_image(data: bytes) -> Image.Image:
    """Decode image bytes into an RGBA Pillow image."""
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError(f"Unsupported image data: {e}")
    return image.convert("RGBA")


def to_png_data_uri(image: Image.Image) -> str:
    """Encode an image as a base64 PNG data URI."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def _clear_near(image: Image.Image, color: tuple[float, float, float], tolerance: float) -> Image.Image:
    pixels = np.array(image.convert("RGBA"), dtype=np.uint8)
    rgb = pixels[..., :3].astype(np.float64)
    distance = np.sqrt(((rgb - np.asarray(color, dtype=np.float64)) ** 2).sum(axis=-1))
    pixels[distance < tolerance, 3] = 0
    return Image.fromarray(pixels)


def remove_color_background(
    image: Image.Image,
    target_color: str = DEFAULT_TARGET_COLOR,
    tolerance: float = DEFAULT_TOLERANCE,
) -> Image.Image:
    """Make every pixel close to ``target_color`` transparent."""
    rgb = hex_to_rgb(target_color)
    if rgb is None:
        raise ValidationError("Invalid target color")
    return _clear_near(image, rgb, tolerance)


def remove_edge_based_background(
    image: Image.Image,
    threshold: int = DEFAULT_EDGE_THRESHOLD,
) -> Image.Image:
    """Binarize luminance at ``threshold``, keeping the source alpha."""
    rgba = image.convert("RGBA")
    alpha = rgba.getchannel("A")
    mono = rgba.convert("L").point(lambda value: 255 if value >= threshold else 0)
    return Image.merge("RGBA", (mono, mono, mono, alpha))


def estimate_border_color(image: Image.Image) -> tuple[float, float, float]:
    """Average colour of the left and right border strips."""
    pixels = np.asarray(image.convert("RGB"), dtype=np.float64)
    width = pixels.shape[1]
    border = max(1, int(width * BORDER_FRACTION))
    strips = np.concatenate([pixels[:, :border], pixels[:, width - border:]], axis=1)
    return tuple(strips.reshape(-1, 3).mean(axis=0))


def remove_ai_background(image: Image.Image, tolerance: float = AI_TOLERANCE) -> Image.Image:
    """Treat the border colour as background and clear pixels near it."""
    return _clear_near(image, estimate_border_color(image), tolerance)


def apply_manual_mask(image: Image.Image, mask: Image.Image) -> Image.Image:
    """Use a greyscale mask (white keeps, black clears) as the alpha channel."""
    rgba = image.convert("RGBA")
    alpha = mask.convert("L").resize(rgba.size)
    rgba.putalpha(alpha)
    return rgba


def feather_edges(image: Image.Image, amount: float) -> Image.Image:
    """Soften edges with a Gaussian blur scaled from ``amount``."""
    if not amount:
        return image
    radius = max(0.3, min(amount / 10, 2))
    return image.filter(ImageFilter.GaussianBlur(radius=radius))


def remove_background(
    image: Image.Image,
    method: str,
    options: dict[str, Any] | None = None,
    mask: Image.Image | None = None,
) -> Image.Image:
    """Dispatch to the removal routine for ``method`` and apply feathering.

    Args:
        image: Source image.
        method: One of METHODS.
        options: Method options (targetColor, tolerance, edgeThreshold,
            smoothEdges, featherAmount).
        mask: Mask image, required for the manual method.
    """
    options = options or {}

    if method == "color-based":
        result = remove_color_background(
            image,
            target_color=options.get("targetColor") or DEFAULT_TARGET_COLOR,
            tolerance=options.get("tolerance") or DEFAULT_TOLERANCE,
        )
    elif method == "edge-based":
        result = remove_edge_based_background(
            image, threshold=options.get("edgeThreshold") or DEFAULT_EDGE_THRESHOLD
        )
    elif method == "ai-based":
        result = remove_ai_background(image)
    elif method == "manual":
        if mask is None:
            raise ValidationError("Manual mask requires maskPath")
        result = apply_manual_mask(image, mask)
    else:
        raise ValidationError("Unsupported background removal method")

    if options.get("smoothEdges") or options.get("featherAmount"):
        result = feather_edges(result, options.get("featherAmount") or 0)
    return result
