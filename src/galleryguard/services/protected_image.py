"""
Protected image component.

Ties one ``CanvasRenderer`` to one ``ProtectionOrchestrator``. Each instance
owns its own surface, state and listeners; nothing is shared between
rendered images.
"""

import structlog

from galleryguard.models.protection import ImageSource, ProtectionConfig
from galleryguard.platform.events import PlatformEventSource

from .orchestrator import ProtectionOrchestrator, ProtectionView, ViolationCallback
from .renderer import CanvasRenderer, DisplaySurface, ImageLoader
from .scheduler import Scheduler

logger = structlog.get_logger(__name__)


class ProtectedImage:
    """
    A rendered, watermarked image guarded by the protection state machine.

    Usage::

        image = ProtectedImage(event_source, config, on_violation=audit)
        image.mount()
        await image.show(ImageSource(url, alt_text))
        ...
        image.unmount()
    """

    def __init__(
        self,
        event_source: PlatformEventSource,
        config: ProtectionConfig | None = None,
        on_violation: ViolationCallback | None = None,
        loader: ImageLoader | None = None,
        scheduler: Scheduler | None = None,
        dwell_seconds: float | None = None,
        locale: str | None = None,
    ):
        self.event_source = event_source
        self.config = config or ProtectionConfig()
        self.renderer = CanvasRenderer(loader=loader)
        self.orchestrator = ProtectionOrchestrator(
            event_source,
            config=self.config,
            on_violation=on_violation,
            scheduler=scheduler,
            dwell_seconds=dwell_seconds,
            locale=locale,
        )
        self.alt_text = ""
        self._source: ImageSource | None = None

    @property
    def image_ready(self) -> bool:
        return self.renderer.image_ready

    @property
    def display(self) -> DisplaySurface:
        return self.renderer.display

    def mount(self) -> None:
        self.orchestrator.mount()

    def unmount(self) -> None:
        self.orchestrator.unmount()

    def __enter__(self) -> "ProtectedImage":
        self.mount()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unmount()

    async def show(self, source: ImageSource) -> bool:
        """Render a new image source with the current watermark settings."""
        self._source = source
        return await self._redraw()

    async def update_config(self, config: ProtectionConfig) -> bool:
        """
        Apply new settings. Toggles take effect at once; a watermark change
        re-runs the whole draw sequence.
        """
        watermark_changed = (
            config.watermark_text != self.config.watermark_text
            or config.watermark_opacity != self.config.watermark_opacity
            or config.watermark_position != self.config.watermark_position
        )
        self.config = config
        self.orchestrator.update_config(config)

        if watermark_changed and self._source is not None:
            return await self._redraw()
        return self.image_ready

    async def _redraw(self) -> bool:
        source = self._source
        config = self.config
        ready = await self.renderer.render(
            source, config.watermark_text, config.watermark_opacity, config.watermark_position
        )
        if ready:
            self.alt_text = source.alt_text
            self.orchestrator.reset()
            logger.info("image_rendered", alt_text=source.alt_text, size=self.display.size)
        return ready

    def view_model(self) -> ProtectionView:
        return self.orchestrator.view_model()
