"""
Protection data model for galleryguard.

Transient, per-rendered-image values: the protection settings a gallery
carries, the image being shown, and the signal/state vocabulary shared by
the detectors and the orchestrator.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

DEFAULT_WATERMARK_TEXT = "© Protected"
DEFAULT_WATERMARK_OPACITY = 0.3


class WatermarkPosition(Enum):
    """Anchor used to place the watermark on the surface."""

    TOP_LEFT = "top-left"
    TOP_CENTER = "top-center"
    TOP_RIGHT = "top-right"
    CENTER = "center"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_CENTER = "bottom-center"
    BOTTOM_RIGHT = "bottom-right"

    @classmethod
    def parse(cls, value: Any) -> "WatermarkPosition":
        """Resolve a stored position name; unknown or missing values fall back to bottom-right."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower().replace("_", "-")
            for position in cls:
                if position.value == normalized:
                    return position
        return cls.BOTTOM_RIGHT


class ViewState(Enum):
    """Visual protection state of one rendered image."""

    NORMAL = "normal"
    OBSCURED = "obscured"
    VIOLATION_FLASH = "violation_flash"


class SignalEvent(Enum):
    """Logical signals produced by detectors and interaction handlers."""

    FOCUS_LOST = "focus_lost"
    FOCUS_GAINED = "focus_gained"
    SCREENSHOT_ATTEMPT = "screenshot_attempt"
    CONTEXT_MENU_ATTEMPT = "context_menu_attempt"
    DRAG_ATTEMPT = "drag_attempt"


class Platform(Enum):
    """Operating system family reported by the viewing environment."""

    WINDOWS = "windows"
    MAC = "mac"
    LINUX = "linux"
    OTHER = "other"


_MAC_PATTERN = re.compile(r"Mac|iPhone|iPad|iPod")
_WINDOWS_PATTERN = re.compile(r"Win")
_LINUX_PATTERN = re.compile(r"Linux")


def detect_platform(platform_string: str | None) -> Platform:
    """
    Derive the platform family from an environment platform string.

    Args:
        platform_string: Value such as ``"Win32"``, ``"MacIntel"`` or ``"Linux x86_64"``

    Returns:
        Platform: Detected family, OTHER when nothing matches
    """
    if not platform_string:
        return Platform.OTHER
    if _MAC_PATTERN.search(platform_string):
        return Platform.MAC
    if _WINDOWS_PATTERN.search(platform_string):
        return Platform.WINDOWS
    if _LINUX_PATTERN.search(platform_string):
        return Platform.LINUX
    return Platform.OTHER


def clamp_opacity(value: Any) -> float:
    """Clamp an opacity to [0, 1]; unparseable values give the default opacity."""
    try:
        opacity = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WATERMARK_OPACITY
    if opacity != opacity:  # NaN
        return DEFAULT_WATERMARK_OPACITY
    return min(1.0, max(0.0, opacity))


def _setting(settings: dict[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    if camel in settings and settings[camel] is not None:
        return settings[camel]
    if snake in settings and settings[snake] is not None:
        return settings[snake]
    return default


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)


@dataclass(frozen=True)
class ProtectionConfig:
    """
    Protection settings for one render pass.

    Opacity is clamped and the position normalized on construction, so any
    instance that exists satisfies both invariants.
    """

    watermark_text: str = DEFAULT_WATERMARK_TEXT
    watermark_opacity: float = DEFAULT_WATERMARK_OPACITY
    watermark_position: WatermarkPosition = WatermarkPosition.BOTTOM_RIGHT
    disable_print_screen: bool = True
    disable_right_click: bool = True
    disable_download: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "watermark_text", self.watermark_text or "")
        object.__setattr__(self, "watermark_opacity", clamp_opacity(self.watermark_opacity))
        object.__setattr__(self, "watermark_position", WatermarkPosition.parse(self.watermark_position))

    @property
    def watermark_enabled(self) -> bool:
        return bool(self.watermark_text)

    @classmethod
    def from_gallery_settings(cls, settings: dict[str, Any] | None) -> "ProtectionConfig":
        """
        Build a config from a gallery's stored settings row.

        Accepts both camelCase keys (as stored) and snake_case keys.
        Opacity may be a decimal string such as ``"0.30"``. A gallery with
        the watermark switched off gets an empty watermark text.

        Args:
            settings: Stored settings, or None for a gallery without a settings row

        Returns:
            ProtectionConfig: Config with defaults for anything missing
        """
        if not settings:
            return cls()

        enabled = _flag(_setting(settings, "watermarkEnabled", "watermark_enabled", True))
        text = _setting(settings, "watermarkText", "watermark_text", DEFAULT_WATERMARK_TEXT)

        raw_opacity = _setting(settings, "watermarkOpacity", "watermark_opacity", DEFAULT_WATERMARK_OPACITY)
        if isinstance(raw_opacity, str):
            try:
                raw_opacity = Decimal(raw_opacity.strip())
            except InvalidOperation:
                raw_opacity = DEFAULT_WATERMARK_OPACITY

        return cls(
            watermark_text=str(text) if enabled else "",
            watermark_opacity=clamp_opacity(raw_opacity),
            watermark_position=WatermarkPosition.parse(
                _setting(settings, "watermarkPosition", "watermark_position")
            ),
            disable_print_screen=_flag(
                _setting(settings, "printScreenDetectionEnabled", "print_screen_detection_enabled", True)
            ),
            disable_right_click=_flag(_setting(settings, "rightClickDisabled", "right_click_disabled", True)),
            disable_download=_flag(_setting(settings, "downloadDisabled", "download_disabled", True)),
        )


@dataclass(frozen=True)
class ImageSource:
    """Image to display. Class names only affect layout."""

    url: str
    alt_text: str = ""
    class_name: str = ""
    container_class_name: str = ""


@dataclass
class GalleryImage:
    """One entry of a gallery's ordered image list."""

    id: int | str
    filename: str
    url: str
    width: int | None = None
    height: int | None = None

    def to_source(self) -> ImageSource:
        return ImageSource(url=self.url, alt_text=self.filename)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GalleryImage":
        return cls(
            id=data.get("id", data.get("filename", "")),
            filename=data.get("filename", ""),
            url=data["url"],
            width=data.get("width"),
            height=data.get("height"),
        )


@dataclass
class Gallery:
    """Gallery as handed over by the host: title, ordered images and settings."""

    id: int | str
    title: str
    images: list[GalleryImage] = field(default_factory=list)
    description: str | None = None
    settings: dict[str, Any] | None = None

    @property
    def protection(self) -> ProtectionConfig:
        return ProtectionConfig.from_gallery_settings(self.settings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Gallery":
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            description=data.get("description"),
            images=[GalleryImage.from_dict(item) for item in data.get("images", [])],
            settings=data.get("settings"),
        )
