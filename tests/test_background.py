"""Tests for background removal routines."""

import base64
import io

import httpx
import numpy as np
import pytest
from PIL import Image

from storyvid.errors import UpstreamError, ValidationError
from storyvid.media import background


@pytest.fixture
def icon() -> Image.Image:
    """20x20 white canvas with a dark blue 8x8 square in the middle."""
    image = Image.new("RGB", (20, 20), (255, 255, 255))
    for x in range(6, 14):
        for y in range(6, 14):
            image.putpixel((x, y), (10, 30, 120))
    return image.convert("RGBA")


def alpha(image: Image.Image) -> np.ndarray:
    return np.asarray(image.getchannel("A"))


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


class TestHexToRgb:
    """Tests for hex_to_rgb."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("#FFFFFF", (255, 255, 255)),
            ("00ff7f", (0, 255, 127)),
            ("#1a2B3c", (26, 43, 60)),
        ],
    )
    def test_valid(self, value, expected):
        assert background.hex_to_rgb(value) == expected

    @pytest.mark.parametrize("value", ["", "#FFF", "white", "#GGGGGG", "#1234567"])
    def test_invalid(self, value):
        assert background.hex_to_rgb(value) is None


class TestDecodeDataUri:
    """Tests for decode_data_uri."""

    def test_base64(self):
        uri = "data:image/png;base64," + base64.b64encode(b"payload").decode()
        assert background.decode_data_uri(uri) == b"payload"

    def test_plain(self):
        assert background.decode_data_uri("data:text/plain,hello") == b"hello"

    def test_malformed(self):
        with pytest.raises(ValidationError):
            background.decode_data_uri("data:image/png;base64")


class TestFetchImageBytes:
    """Tests for fetch_image_bytes."""

    def test_data_uri(self):
        uri = "data:image/png;base64," + base64.b64encode(b"abc").decode()
        assert background.fetch_image_bytes(uri) == b"abc"

    def test_http_url(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url == "https://cdn.example.com/icon.png"
            return httpx.Response(200, content=b"png-bytes")

        client = httpx.Client(transport=httpx.MockTransport(handler))
        assert background.fetch_image_bytes("https://cdn.example.com/icon.png", client) == b"png-bytes"

    def test_http_error(self):
        client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
        with pytest.raises(UpstreamError, match="Failed to download image"):
            background.fetch_image_bytes("https://cdn.example.com/missing.png", client)

    def test_unsupported_scheme(self):
        with pytest.raises(ValidationError):
            background.fetch_image_bytes("file:///etc/passwd")


class TestOpenImage:
    """Tests for open_image and to_png_data_uri."""

    def test_open_converts_to_rgba(self, icon):
        image = background.open_image(png_bytes(icon.convert("RGB")))
        assert image.mode == "RGBA"
        assert image.size == (20, 20)

    def test_open_garbage(self):
        with pytest.raises(ValidationError, match="Unsupported image data"):
            background.open_image(b"definitely not a png")

    def test_png_data_uri_decodes(self, icon):
        uri = background.to_png_data_uri(icon)
        decoded = background.open_image(background.decode_data_uri(uri))
        assert decoded.getpixel((10, 10)) == icon.getpixel((10, 10))


class TestRemoval:
    """Tests for the individual removal methods."""

    def test_color_based_clears_white(self, icon):
        result = background.remove_color_background(icon)
        assert alpha(result)[0, 0] == 0
        assert alpha(result)[10, 10] == 255

    def test_color_based_respects_tolerance(self, icon):
        # Light grey sits about 26 away from white
        icon.putpixel((0, 0), (240, 240, 240, 255))
        assert alpha(background.remove_color_background(icon, tolerance=30))[0, 0] == 0
        assert alpha(background.remove_color_background(icon, tolerance=20))[0, 0] == 255

    def test_color_based_invalid_color(self, icon):
        with pytest.raises(ValidationError, match="Invalid target color"):
            background.remove_color_background(icon, target_color="blue")

    def test_edge_based_binarizes(self, icon):
        result = background.remove_edge_based_background(icon, threshold=50)
        assert result.getpixel((0, 0)) == (255, 255, 255, 255)
        assert result.getpixel((10, 10)) == (0, 0, 0, 255)

    def test_edge_based_keeps_alpha(self, icon):
        icon.putpixel((0, 0), (255, 255, 255, 0))
        assert alpha(background.remove_edge_based_background(icon))[0, 0] == 0

    def test_border_color(self, icon):
        assert background.estimate_border_color(icon) == pytest.approx((255, 255, 255))

    def test_ai_based_uses_border(self):
        image = Image.new("RGBA", (20, 20), (0, 128, 0, 255))
        image.putpixel((10, 10), (250, 250, 250, 255))

        result = background.remove_ai_background(image)
        assert alpha(result)[0, 0] == 0
        assert alpha(result)[10, 10] == 255

    def test_manual_mask_is_resized(self, icon):
        mask = Image.new("L", (10, 10), 0)
        mask.paste(255, (0, 0, 5, 10))

        result = background.apply_manual_mask(icon, mask)
        assert result.size == icon.size
        assert alpha(result)[5, 2] == 255
        assert alpha(result)[5, 17] == 0

    def test_feather_zero_is_noop(self, icon):
        assert background.feather_edges(icon, 0) is icon

    def test_feather_softens(self, icon):
        cleared = background.remove_color_background(icon)
        feathered = background.feather_edges(cleared, 10)
        edge = alpha(feathered)[10, 6]
        assert 0 < edge < 255


class TestRemoveBackground:
    """Tests for the remove_background dispatcher."""

    def test_options_passed_through(self, icon):
        result = background.remove_background(
            icon, "color-based", {"targetColor": "#0A1E78", "tolerance": 5}
        )
        assert alpha(result)[10, 10] == 0
        assert alpha(result)[0, 0] == 255

    def test_manual_requires_mask(self, icon):
        with pytest.raises(ValidationError, match="maskPath"):
            background.remove_background(icon, "manual")

    def test_unsupported_method(self, icon):
        with pytest.raises(ValidationError, match="Unsupported"):
            background.remove_background(icon, "lasso")

    def test_smooth_edges(self, icon):
        plain = background.remove_background(icon, "color-based")
        smoothed = background.remove_background(
            icon, "color-based", {"smoothEdges": True, "featherAmount": 10}
        )
        assert not np.array_equal(alpha(plain), alpha(smoothed))
