"""
Canvas renderer for protected images.

The source image is fetched into memory, drawn onto a surface the renderer
owns, watermarked, and only then copied onto the display surface. The
display surface is the one thing handed to the document, as inline pixel
data, so the source URL never appears in the page.
"""

import asyncio
import base64
import io
import time
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

import httpx
import structlog
from PIL import Image, UnidentifiedImageError

from galleryguard.config import get_image_load_timeout
from galleryguard.errors import ImageLoadError
from galleryguard.logging_config import log_performance
from galleryguard.models.protection import ImageSource, WatermarkPosition

from .watermark import draw_watermark

logger = structlog.get_logger(__name__)


class ImageLoader(Protocol):
    async def load(self, url: str) -> bytes: ...


class HttpImageLoader:
    """
    Fetches image bytes anonymously.

    No cookies and no credentials are sent, the equivalent of a
    ``crossorigin="anonymous"`` request. ``file://`` URLs and bare paths are
    read from disk for local galleries.
    """

    def __init__(self, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout or get_image_load_timeout()
        self._transport = transport

    async def load(self, url: str) -> bytes:
        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise ImageLoadError(
                f"Malformed image URL: {e}",
                code="invalid_url",
                original_exception=e,
            ) from e

        if parsed.scheme in ("http", "https"):
            return await self._fetch(url)
        if parsed.scheme in ("", "file"):
            path = Path(unquote(parsed.path) if parsed.scheme == "file" else url)
            try:
                return await asyncio.to_thread(path.read_bytes)
            except (OSError, ValueError) as e:
                raise ImageLoadError(
                    f"Cannot read image file: {path}",
                    code="image_file_unreadable",
                    details={"path": str(path)},
                    original_exception=e,
                ) from e

        raise ImageLoadError(
            f"Unsupported image URL scheme: {parsed.scheme}",
            code="unsupported_scheme",
            details={"scheme": parsed.scheme},
        )

    async def _fetch(self, url: str) -> bytes:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, follow_redirects=True, transport=self._transport
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.content
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageLoadError(
                f"Failed to fetch image: {e}",
                code="image_fetch_failed",
                details={"host": urlparse(url).netloc},
                original_exception=e,
            ) from e


def decode_image(data: bytes) -> Image.Image:
    """Decode bytes into an RGBA bitmap at natural size."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            return image.convert("RGBA")
    # Pillow plugins raise ValueError or SyntaxError on corrupt headers
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as e:
        raise ImageLoadError(
            "Image data could not be decoded",
            code="image_decode_failed",
            details={"size_bytes": len(data)},
            original_exception=e,
        ) from e


class DisplaySurface:
    """
    The visible drawing surface.

    Receives pixel copies from the renderer; callers can serialize it but
    never get a reference to the renderer's own buffer.
    """

    def __init__(self) -> None:
        self._pixels: Image.Image | None = None

    @property
    def is_blank(self) -> bool:
        return self._pixels is None

    @property
    def size(self) -> tuple[int, int]:
        return self._pixels.size if self._pixels is not None else (0, 0)

    def blit(self, surface: Image.Image) -> None:
        """Resize to the surface and copy its pixels."""
        self._pixels = surface.copy()

    def clear(self) -> None:
        self._pixels = None

    def snapshot(self) -> Image.Image | None:
        """Copy of the current pixels, for inspection."""
        return self._pixels.copy() if self._pixels is not None else None

    def to_png_bytes(self) -> bytes:
        if self._pixels is None:
            return b""
        buffer = io.BytesIO()
        self._pixels.save(buffer, format="PNG")
        return buffer.getvalue()

    def to_data_uri(self) -> str:
        """Inline pixel data for embedding in the document."""
        if self._pixels is None:
            return ""
        return "data:image/png;base64," + base64.b64encode(self.to_png_bytes()).decode("ascii")


class CanvasRenderer:
    """
    Loads, draws and watermarks one image at a time.

    Every ``render`` call takes a new generation number; a load that
    completes after a newer call started is discarded, so the display always
    ends on the most recently requested image.
    """

    def __init__(self, loader: ImageLoader | None = None, display: DisplaySurface | None = None):
        self.loader = loader or HttpImageLoader()
        self.display = display or DisplaySurface()
        self.image_ready = False
        self._surface: Image.Image | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    async def render(
        self,
        source: ImageSource,
        watermark_text: str,
        opacity: float,
        position: WatermarkPosition | str,
    ) -> bool:
        """
        Run the full draw sequence for an image.

        Args:
            source: Image to show
            watermark_text: Text to composite; empty draws the bare image
            opacity: Watermark alpha in [0, 1]
            position: Watermark anchor name

        Returns:
            bool: True if this call's result is now on the display surface
        """
        self._generation += 1
        generation = self._generation
        start_time = time.perf_counter()

        try:
            data = await self.loader.load(source.url)
            loaded = decode_image(data)
        except ImageLoadError as e:
            if generation != self._generation:
                logger.debug("stale_render_failure_ignored", generation=generation)
                return False
            logger.warning("image_load_failed", alt_text=source.alt_text, code=e.code)
            self._surface = None
            self.display.clear()
            self.image_ready = False
            return False

        if generation != self._generation:
            logger.debug("stale_render_discarded", generation=generation, current=self._generation)
            return False

        self._surface = draw_watermark(loaded, watermark_text, opacity, position)
        self.display.blit(self._surface)
        self.image_ready = True

        log_performance(
            "render_protected_image",
            time.perf_counter() - start_time,
            width=self._surface.width,
            height=self._surface.height,
            watermarked=bool(watermark_text),
        )
        return True
