"""
Watermark layout and compositing.

Layout is pure arithmetic on the surface size so it can be checked without
drawing. Compositing draws the text on a transparent layer and alpha
composites it over the image.
"""

from dataclasses import dataclass
from functools import lru_cache

import structlog
from PIL import Image, ImageDraw, ImageFont

from galleryguard.models.protection import WatermarkPosition, clamp_opacity

logger = structlog.get_logger(__name__)

FONT_SIZE_RATIO = 0.05
HORIZONTAL_INSET = 2.0
VERTICAL_INSET = 1.5

# Bold faces tried in order; Pillow's bundled font is the last resort
BOLD_FONT_CANDIDATES = (
    "DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
    "LiberationSans-Bold.ttf",
)


@dataclass(frozen=True)
class WatermarkLayout:
    """Where and how the watermark text is drawn."""

    font_size: float
    anchor_x: float
    anchor_y: float
    alpha: float

    @property
    def anchor(self) -> tuple[float, float]:
        return (self.anchor_x, self.anchor_y)

    @property
    def fill(self) -> tuple[int, int, int, int]:
        """RGBA fill; the float alpha is quantized only here."""
        return (255, 255, 255, round(self.alpha * 255))


def font_size_for(width: int, height: int) -> float:
    return max(width, height) * FONT_SIZE_RATIO


def compute_anchor(
    width: int, height: int, font_size: float, position: WatermarkPosition | str
) -> tuple[float, float]:
    """
    Anchor point the watermark text is centered on.

    Corners are inset 2x font size horizontally and 1.5x vertically; the
    ``*-center`` variants sit on the vertical midline.
    """
    position = WatermarkPosition.parse(position)
    dx = font_size * HORIZONTAL_INSET
    dy = font_size * VERTICAL_INSET

    x = {
        WatermarkPosition.TOP_LEFT: dx,
        WatermarkPosition.BOTTOM_LEFT: dx,
        WatermarkPosition.TOP_RIGHT: width - dx,
        WatermarkPosition.BOTTOM_RIGHT: width - dx,
    }.get(position, width / 2)

    y = {
        WatermarkPosition.TOP_LEFT: dy,
        WatermarkPosition.TOP_CENTER: dy,
        WatermarkPosition.TOP_RIGHT: dy,
        WatermarkPosition.BOTTOM_LEFT: height - dy,
        WatermarkPosition.BOTTOM_CENTER: height - dy,
        WatermarkPosition.BOTTOM_RIGHT: height - dy,
    }.get(position, height / 2)

    return (x, y)


def watermark_layout(
    width: int, height: int, opacity: float, position: WatermarkPosition | str
) -> WatermarkLayout:
    font_size = font_size_for(width, height)
    x, y = compute_anchor(width, height, font_size, position)
    return WatermarkLayout(font_size=font_size, anchor_x=x, anchor_y=y, alpha=clamp_opacity(opacity))


@lru_cache(maxsize=32)
def load_bold_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for candidate in BOLD_FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue

    logger.warning("bold_font_unavailable", size=size, candidates=list(BOLD_FONT_CANDIDATES))
    return ImageFont.load_default(size=size)


def draw_watermark(
    image: Image.Image, text: str, opacity: float, position: WatermarkPosition | str
) -> Image.Image:
    """
    Composite watermark text onto an RGBA image.

    Args:
        image: RGBA image to watermark; not modified
        text: Watermark text; empty text returns an unmodified copy
        opacity: Text alpha in [0, 1]
        position: Anchor name

    Returns:
        Image.Image: New RGBA image with the watermark composited
    """
    if not text:
        return image.copy()

    layout = watermark_layout(image.width, image.height, opacity, position)
    font = load_bold_font(max(1, round(layout.font_size)))

    layer = Image.new("RGBA", image.size, (255, 255, 255, 0))
    draw = ImageDraw.Draw(layer)

    # Center the text box on the anchor
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    origin = (
        layout.anchor_x - (left + right) / 2,
        layout.anchor_y - (top + bottom) / 2,
    )
    draw.text(origin, text, font=font, fill=layout.fill)

    return Image.alpha_composite(image, layer)
