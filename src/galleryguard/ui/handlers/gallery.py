"""Gallery handlers: manifest loading, navigation and violation auditing."""

import json
from collections.abc import Callable
from pathlib import Path

import structlog

from galleryguard.errors import ConfigurationError
from galleryguard.logging_config import log_protection_violation
from galleryguard.models.protection import Gallery, GalleryImage

logger = structlog.get_logger(__name__)


def load_gallery_manifest(path: str | Path) -> Gallery:
    """
    Load a gallery description from a JSON manifest.

    The manifest mirrors what the gallery API returns for a token:
    ``{"id", "title", "description", "images": [{"id", "filename", "url",
    "width", "height"}], "settings": {...}}``.

    Raises:
        ConfigurationError: If the file is missing or not a valid manifest
    """
    manifest_path = Path(path)
    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read gallery manifest: {manifest_path}",
            code="manifest_unreadable",
            details={"path": str(manifest_path)},
            original_exception=e,
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Gallery manifest must be a JSON object",
            code="manifest_invalid",
            details={"path": str(manifest_path)},
        )

    try:
        gallery = Gallery.from_dict(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise ConfigurationError(
            f"Gallery manifest has an invalid image entry: {e}",
            code="manifest_invalid",
            details={"path": str(manifest_path)},
            original_exception=e,
        ) from e

    logger.info("gallery_manifest_loaded", gallery_id=gallery.id, image_count=len(gallery.images))
    return gallery


class GalleryViewer:
    """Selected-image cursor over a gallery's ordered image list. Navigation wraps around."""

    def __init__(self, images: list[GalleryImage], index: int = 0):
        self.images = images
        self.index = index if 0 <= index < len(images) else 0

    @property
    def current(self) -> GalleryImage | None:
        return self.images[self.index] if self.images else None

    @property
    def has_multiple(self) -> bool:
        return len(self.images) > 1

    def previous(self) -> GalleryImage | None:
        if self.images:
            self.index = len(self.images) - 1 if self.index == 0 else self.index - 1
        return self.current

    def next(self) -> GalleryImage | None:
        if self.images:
            self.index = 0 if self.index == len(self.images) - 1 else self.index + 1
        return self.current

    def select(self, index: int) -> GalleryImage | None:
        if 0 <= index < len(self.images):
            self.index = index
        return self.current


def make_violation_auditor(gallery: Gallery, viewer: GalleryViewer) -> Callable[[], None]:
    """Violation callback that writes a security audit entry for the image on screen."""

    def audit() -> None:
        current = viewer.current
        log_protection_violation(
            "client_violation",
            gallery_id=gallery.id,
            image_index=viewer.index,
            image_id=current.id if current else None,
        )

    return audit
