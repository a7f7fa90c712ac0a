"""Streamlit rendering of protected images."""

from pathlib import Path
from typing import Any

import streamlit.components.v1 as components
import structlog

from galleryguard.models.protection import Platform, ProtectionConfig
from galleryguard.platform.bridge import BrowserEventBridge
from galleryguard.services.orchestrator import BLUR_FILTER, ProtectionView
from galleryguard.services.protected_image import ProtectedImage
from galleryguard.services.screenshot_detector import screenshot_patterns

logger = structlog.get_logger(__name__)

FRONTEND_DIR = Path(__file__).parent / "frontend"

# The browser side mirrors the Python detectors: same pattern table, same
# toggles, same dwell. Pixels arrive as inline data drawn onto a canvas, so
# there is no image element whose address could be copied. Every event it
# blocks is reported back as the component value.
_protected_surface = components.declare_component("galleryguard_protected_surface", path=str(FRONTEND_DIR))


def build_surface_args(
    data_uri: str,
    view: ProtectionView,
    config: ProtectionConfig,
    alt_text: str = "",
    class_name: str = "",
    container_class_name: str = "",
    dwell_seconds: float = 2.0,
    height: int = 600,
    seen_seq: int = 0,
) -> dict[str, Any]:
    """
    Build the arguments sent to the browser side of the protected surface.

    Args:
        data_uri: Inline pixel data of the display surface
        view: Current protection view model
        config: Protection toggles mirrored by the browser script
        alt_text: Accessible label for the surface
        class_name: Extra classes for the surface
        container_class_name: Extra classes for the container
        dwell_seconds: How long the screenshot overlay stays visible
        height: Frame height in pixels
        seen_seq: Last browser event already replayed; the browser keeps its
            own overlay state until the view reflects all its events

    Returns:
        dict: JSON-serializable component arguments
    """
    return {
        "surface": data_uri,
        "altText": alt_text,
        "className": class_name,
        "containerClassName": container_class_name,
        "height": height,
        "seenSeq": seen_seq,
        "view": {
            "blurred": view.blurred,
            "obscuredNotice": view.show_obscured_notice,
            "flash": view.show_flash_overlay,
        },
        "notices": {
            "obscuredTitle": view.notices.obscured_title,
            "obscuredHint": view.notices.obscured_hint,
            "screenshotBlocked": view.notices.screenshot_blocked,
        },
        "settings": {
            "printScreen": config.disable_print_screen,
            "rightClick": config.disable_right_click,
            "download": config.disable_download,
            "dwellMs": int(dwell_seconds * 1000),
            "blurFilter": BLUR_FILTER,
            "patterns": {
                platform.value: [combo.to_dict() for combo in screenshot_patterns(platform)] for platform in Platform
            },
        },
    }


def render_protected_image(
    image: ProtectedImage,
    height: int = 600,
    class_name: str = "",
    container_class_name: str = "",
    bridge: BrowserEventBridge | None = None,
    key: str | None = None,
) -> bool:
    """
    Render a protected image into the current Streamlit page.

    Args:
        image: Component whose display surface and view model are drawn
        height: Height of the embedded frame in pixels
        class_name: Extra classes for the surface
        container_class_name: Extra classes for the container
        bridge: Receives the browser's event batch and replays it into the
            image's event source
        key: Streamlit widget key, stable across reruns

    Returns:
        bool: True if a surface was drawn, False if the image is not ready
    """
    if not image.image_ready or image.display.is_blank:
        logger.debug("protected_image_not_ready")
        return False

    args = build_surface_args(
        image.display.to_data_uri(),
        image.view_model(),
        image.config,
        alt_text=image.alt_text,
        class_name=class_name,
        container_class_name=container_class_name,
        dwell_seconds=image.orchestrator.dwell_seconds,
        height=height,
        seen_seq=bridge.last_seq if bridge is not None else 0,
    )
    batch = _protected_surface(**args, key=key, default=None)
    if bridge is not None:
        bridge.forward(batch)
    return True
