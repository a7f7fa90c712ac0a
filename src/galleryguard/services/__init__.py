"""
Services for galleryguard.

Detectors, the canvas renderer and the protection orchestrator.
"""

from .focus_detector import FocusDetector
from .orchestrator import ProtectionOrchestrator, ProtectionView
from .protected_image import ProtectedImage
from .renderer import CanvasRenderer, DisplaySurface, HttpImageLoader
from .scheduler import AsyncioScheduler, ManualScheduler
from .screenshot_detector import ScreenshotDetector, is_screenshot_combo, screenshot_patterns
from .watermark import compute_anchor, draw_watermark, watermark_layout

__all__ = [
    "AsyncioScheduler",
    "CanvasRenderer",
    "DisplaySurface",
    "FocusDetector",
    "HttpImageLoader",
    "ManualScheduler",
    "ProtectedImage",
    "ProtectionOrchestrator",
    "ProtectionView",
    "ScreenshotDetector",
    "compute_anchor",
    "draw_watermark",
    "is_screenshot_combo",
    "screenshot_patterns",
    "watermark_layout",
]
