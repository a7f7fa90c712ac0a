"""
Unit tests for watermark layout and compositing.
"""

import pytest
from PIL import Image

from galleryguard.models.protection import WatermarkPosition
from galleryguard.services.watermark import (
    compute_anchor,
    draw_watermark,
    font_size_for,
    watermark_layout,
)


class TestWatermarkLayout:
    """Test anchor and font size computation."""

    def test_font_size_is_five_percent_of_longest_side(self):
        assert font_size_for(1000, 500) == pytest.approx(50)
        assert font_size_for(300, 1200) == pytest.approx(60)

    @pytest.mark.parametrize(
        "position, expected",
        [
            (WatermarkPosition.TOP_LEFT, (100, 75)),
            (WatermarkPosition.TOP_CENTER, (500, 75)),
            (WatermarkPosition.TOP_RIGHT, (900, 75)),
            (WatermarkPosition.CENTER, (500, 250)),
            (WatermarkPosition.BOTTOM_LEFT, (100, 425)),
            (WatermarkPosition.BOTTOM_CENTER, (500, 425)),
            (WatermarkPosition.BOTTOM_RIGHT, (900, 425)),
        ],
    )
    def test_anchor_points(self, position, expected):
        assert compute_anchor(1000, 500, 50, position) == pytest.approx(expected)

    def test_unknown_position_uses_bottom_right(self):
        assert compute_anchor(1000, 500, 50, "nowhere") == pytest.approx((900, 425))

    @pytest.mark.parametrize("position", list(WatermarkPosition))
    @pytest.mark.parametrize("size", [(20, 20), (100, 20), (1000, 200), (200, 1000), (4000, 3000), (641, 479)])
    def test_anchor_inside_surface(self, position, size):
        width, height = size
        layout = watermark_layout(width, height, 0.3, position)
        assert width >= 4 * layout.font_size and height >= 4 * layout.font_size

        assert 0 <= layout.anchor_x <= width
        assert 0 <= layout.anchor_y <= height

    @pytest.mark.parametrize("opacity", [0.0, 0.123, 0.3, 0.5, 0.999, 1.0])
    def test_alpha_equals_opacity(self, opacity):
        assert watermark_layout(800, 600, opacity, "center").alpha == opacity

    def test_fill_is_white(self):
        assert watermark_layout(800, 600, 1.0, "center").fill == (255, 255, 255, 255)


class TestDrawWatermark:
    """Test compositing onto images."""

    def test_empty_text_leaves_image_untouched(self):
        image = Image.new("RGBA", (300, 200), (10, 20, 30, 255))

        result = draw_watermark(image, "", 0.8, "center")

        assert result.tobytes() == image.tobytes()
        assert result is not image

    def test_watermark_changes_pixels(self):
        image = Image.new("RGBA", (600, 400), (0, 0, 0, 255))

        result = draw_watermark(image, "© Protected", 1.0, "center")

        assert result.size == image.size
        assert result.tobytes() != image.tobytes()
        # White text on black
        assert max(pixel[0] for pixel in result.getdata()) == 255

    def test_input_image_not_modified(self):
        image = Image.new("RGBA", (600, 400), (0, 0, 0, 255))
        before = image.tobytes()

        draw_watermark(image, "© Protected", 1.0, "center")

        assert image.tobytes() == before

    @pytest.mark.parametrize("opacity", [0.25, 0.5, 0.8])
    def test_text_alpha_matches_opacity(self, opacity):
        transparent = Image.new("RGBA", (1000, 1000), (0, 0, 0, 0))

        result = draw_watermark(transparent, "XXXX", opacity, "center")

        assert max(result.getchannel("A").getdata()) == round(opacity * 255)

    def test_zero_opacity_draws_nothing_visible(self):
        image = Image.new("RGBA", (400, 400), (0, 0, 0, 255))

        result = draw_watermark(image, "© Protected", 0.0, "center")

        assert result.tobytes() == image.tobytes()

    def test_text_lands_near_anchor(self):
        image = Image.new("RGBA", (1000, 500), (0, 0, 0, 0))

        result = draw_watermark(image, "MARK", 1.0, WatermarkPosition.TOP_LEFT)
        left, top, right, bottom = result.getchannel("A").getbbox()

        assert (left + right) / 2 == pytest.approx(100, abs=6)
        assert (top + bottom) / 2 == pytest.approx(75, abs=6)
