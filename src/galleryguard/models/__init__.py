"""
Models module for galleryguard.

- ProtectionConfig: watermark and protection toggles for one render pass
- ImageSource / GalleryImage / Gallery: what is being displayed
- ViewState / SignalEvent / Platform: protection state machine vocabulary
"""

from .protection import (
    DEFAULT_WATERMARK_OPACITY,
    DEFAULT_WATERMARK_TEXT,
    Gallery,
    GalleryImage,
    ImageSource,
    Platform,
    ProtectionConfig,
    SignalEvent,
    ViewState,
    WatermarkPosition,
    clamp_opacity,
    detect_platform,
)

__all__ = [
    "DEFAULT_WATERMARK_OPACITY",
    "DEFAULT_WATERMARK_TEXT",
    "Gallery",
    "GalleryImage",
    "ImageSource",
    "Platform",
    "ProtectionConfig",
    "SignalEvent",
    "ViewState",
    "WatermarkPosition",
    "clamp_opacity",
    "detect_platform",
]
