"""
Unit tests for the protection data model.
"""

from decimal import Decimal

import pytest

from galleryguard.models.protection import (
    DEFAULT_WATERMARK_TEXT,
    Gallery,
    GalleryImage,
    Platform,
    ProtectionConfig,
    WatermarkPosition,
    clamp_opacity,
    detect_platform,
)


class TestProtectionConfig:
    """Test cases for ProtectionConfig."""

    def test_defaults(self):
        config = ProtectionConfig()

        assert config.watermark_text == "© Protected"
        assert config.watermark_opacity == 0.3
        assert config.watermark_position == WatermarkPosition.BOTTOM_RIGHT
        assert config.disable_print_screen is True
        assert config.disable_right_click is True
        assert config.disable_download is True

    @pytest.mark.parametrize("value, expected", [(-0.5, 0.0), (1.7, 1.0), (0.45, 0.45), ("0.2", 0.2)])
    def test_opacity_is_clamped(self, value, expected):
        assert ProtectionConfig(watermark_opacity=value).watermark_opacity == pytest.approx(expected)

    def test_invalid_position_falls_back_to_bottom_right(self):
        config = ProtectionConfig(watermark_position="middle-ish")

        assert config.watermark_position == WatermarkPosition.BOTTOM_RIGHT

    def test_position_accepts_names(self):
        assert ProtectionConfig(watermark_position="top-center").watermark_position == WatermarkPosition.TOP_CENTER

    def test_config_is_immutable(self):
        config = ProtectionConfig()

        with pytest.raises(AttributeError):
            config.watermark_text = "changed"

    def test_none_text_disables_watermark(self):
        config = ProtectionConfig(watermark_text=None)

        assert config.watermark_text == ""
        assert config.watermark_enabled is False


class TestFromGallerySettings:
    """Test mapping stored gallery settings to a config."""

    def test_stored_settings_row(self):
        config = ProtectionConfig.from_gallery_settings(
            {
                "watermarkEnabled": True,
                "watermarkText": "© 2024 Studio",
                "watermarkOpacity": "0.50",
                "watermarkPosition": "top-left",
                "printScreenDetectionEnabled": False,
                "rightClickDisabled": True,
                "downloadDisabled": False,
            }
        )

        assert config.watermark_text == "© 2024 Studio"
        assert config.watermark_opacity == pytest.approx(0.5)
        assert config.watermark_position == WatermarkPosition.TOP_LEFT
        assert config.disable_print_screen is False
        assert config.disable_right_click is True
        assert config.disable_download is False

    def test_watermark_disabled_means_empty_text(self):
        config = ProtectionConfig.from_gallery_settings({"watermarkEnabled": False, "watermarkText": "ignored"})

        assert config.watermark_text == ""

    def test_missing_settings_use_defaults(self):
        assert ProtectionConfig.from_gallery_settings(None) == ProtectionConfig()
        assert ProtectionConfig.from_gallery_settings({}) == ProtectionConfig()

    def test_snake_case_keys(self):
        config = ProtectionConfig.from_gallery_settings(
            {"watermark_text": "snake", "watermark_opacity": Decimal("0.75"), "right_click_disabled": False}
        )

        assert config.watermark_text == "snake"
        assert config.watermark_opacity == pytest.approx(0.75)
        assert config.disable_right_click is False
        assert config.disable_print_screen is True

    def test_unparseable_opacity_uses_default(self):
        config = ProtectionConfig.from_gallery_settings({"watermarkOpacity": "lots"})

        assert config.watermark_opacity == 0.3
        assert config.watermark_text == DEFAULT_WATERMARK_TEXT

    @pytest.mark.parametrize(
        "raw,expected", [("false", False), ("0", False), ("off", False), ("TRUE", True), ("1", True), (0, False)]
    )
    def test_string_flags(self, raw, expected):
        config = ProtectionConfig.from_gallery_settings(
            {"rightClickDisabled": raw, "downloadDisabled": raw, "printScreenDetectionEnabled": raw}
        )

        assert config.disable_right_click is expected
        assert config.disable_download is expected
        assert config.disable_print_screen is expected

    def test_watermark_disabled_as_string(self):
        config = ProtectionConfig.from_gallery_settings({"watermarkEnabled": "false", "watermarkText": "ignored"})

        assert config.watermark_text == ""


class TestHelpers:
    """Test platform detection and opacity clamping."""

    @pytest.mark.parametrize(
        "platform_string, expected",
        [
            ("Win32", Platform.WINDOWS),
            ("MacIntel", Platform.MAC),
            ("iPhone", Platform.MAC),
            ("Linux x86_64", Platform.LINUX),
            ("", Platform.OTHER),
            (None, Platform.OTHER),
            ("FreeBSD amd64", Platform.OTHER),
        ],
    )
    def test_detect_platform(self, platform_string, expected):
        assert detect_platform(platform_string) == expected

    def test_clamp_opacity_nan(self):
        assert clamp_opacity(float("nan")) == 0.3

    def test_clamp_opacity_none(self):
        assert clamp_opacity(None) == 0.3


class TestGallery:
    """Test gallery model construction."""

    def test_from_dict(self):
        gallery = Gallery.from_dict(
            {
                "id": 7,
                "title": "Wedding",
                "images": [
                    {"id": 1, "filename": "a.jpg", "url": "https://cdn.example.com/a.jpg", "width": 800, "height": 600},
                    {"id": 2, "filename": "b.jpg", "url": "https://cdn.example.com/b.jpg"},
                ],
                "settings": {"watermarkPosition": "center"},
            }
        )

        assert gallery.title == "Wedding"
        assert [image.id for image in gallery.images] == [1, 2]
        assert gallery.images[0].width == 800
        assert gallery.protection.watermark_position == WatermarkPosition.CENTER

    def test_image_to_source(self):
        image = GalleryImage(id=1, filename="a.jpg", url="https://cdn.example.com/a.jpg")

        source = image.to_source()

        assert source.url == "https://cdn.example.com/a.jpg"
        assert source.alt_text == "a.jpg"
