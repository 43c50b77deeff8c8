import functools
import logging
import math
import shutil
import subprocess
from pathlib import Path

from PIL import Image, ImageDraw, ImageFont

from halftone.charsets import DEFAULT
from halftone.config import HalftoneConfig
from halftone.engine import CellGrid, Renderer
from halftone.errors import ConfigurationError

logger = logging.getLogger(__name__)

BACKGROUND = (255, 255, 255)
INK = (0, 0, 0)

MONOSPACE_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _blank_surface(grid: CellGrid) -> Image.Image:
    return Image.new("RGB", grid.surface_size, BACKGROUND)


def _normalize(radius: float, grid: CellGrid) -> float:
    return min(1.0, max(0.0, radius / grid.max_radius))


@functools.lru_cache(maxsize=1)
def find_monospace_font() -> str | None:
    """Locate a monospace TrueType font: known paths first, then fontconfig."""
    for path in MONOSPACE_CANDIDATES:
        if Path(path).exists():
            return path
    if shutil.which("fc-match") is None:
        return None
    result = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
    if result.returncode == 0 and result.stdout.strip():
        return result.stdout.strip()
    return None


def load_font(font_path: str | None, size: int) -> ImageFont.ImageFont | ImageFont.FreeTypeFont:
    """Load a font sized to one cell: font_path, else a system monospace font, else Pillow's built-in font."""
    if font_path:
        logger.debug("Loading font from %s (size=%d)", font_path, size)
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as e:
            raise ConfigurationError(f"Cannot load font {font_path}: {e}") from e
    monospace = find_monospace_font()
    if monospace:
        logger.debug("Loading system monospace font %s (size=%d)", monospace, size)
        return ImageFont.truetype(monospace, size)
    logger.debug("No monospace font found, using Pillow default font (size=%d)", size)
    return ImageFont.load_default(size=size)


class BlockRenderer:
    """Fills each non-empty cell with a grey square, darker for larger radii."""

    def shade(self, radius: float, grid: CellGrid) -> int:
        g = 255 - math.floor(_normalize(radius, grid) * 255 + 0.5)
        return min(255, max(0, g))

    def render(self, grid: CellGrid) -> Image.Image:
        surface = _blank_surface(grid)
        draw = ImageDraw.Draw(surface)
        s = grid.cell_size
        for x, y, radius in grid.iter_cells():
            if radius <= 0:
                continue
            g = self.shade(radius, grid)
            draw.rectangle([x, y, x + s - 1, y + s - 1], fill=(g, g, g))
        return surface


class DotRenderer:
    """Draws a solid black circle of the cell's radius centred in each non-empty cell."""

    def render(self, grid: CellGrid) -> Image.Image:
        surface = _blank_surface(grid)
        draw = ImageDraw.Draw(surface)
        half = grid.cell_size / 2
        for x, y, radius in grid.iter_cells():
            if radius <= 0:
                continue
            cx, cy = x + half, y + half
            # Pillow includes the right and bottom edges of the box
            x0, y0 = cx - radius, cy - radius
            x1, y1 = max(x0, cx + radius - 1), max(y0, cy + radius - 1)
            draw.ellipse([x0, y0, x1, y1], fill=INK)
        return surface


class AsciiRenderer:
    """Maps each cell's normalized radius onto a glyph ramp.

    Empty cells are not skipped: they map to ramp[0], which is normally a space.
    """

    def __init__(self, ramp: str = DEFAULT, font_path: str | None = None):
        if not ramp:
            raise ConfigurationError("Glyph ramp must contain at least one character")
        self.ramp = ramp
        self.font_path = font_path

    def glyph_for(self, norm: float) -> str:
        last = len(self.ramp) - 1
        idx = min(last, max(0, math.floor(norm * last)))
        return self.ramp[idx]

    def glyph_rows(self, grid: CellGrid) -> list[str]:
        return ["".join(self.glyph_for(_normalize(float(radius), grid)) for radius in row) for row in grid.values]

    def to_text(self, grid: CellGrid) -> str:
        return "\n".join(self.glyph_rows(grid))

    def render(self, grid: CellGrid) -> Image.Image:
        surface = _blank_surface(grid)
        draw = ImageDraw.Draw(surface)
        font = load_font(self.font_path, grid.cell_size)
        for x, y, radius in grid.iter_cells():
            draw.text((x, y), self.glyph_for(_normalize(radius, grid)), fill=INK, font=font)
        return surface


STYLES = ("ascii", "block", "dot")


def make_renderer(style: str, config: HalftoneConfig | None = None) -> Renderer:
    config = config or HalftoneConfig()
    if style == "block":
        return BlockRenderer()
    if style == "dot":
        return DotRenderer()
    if style == "ascii":
        return AsciiRenderer(config.glyph_ramp, config.font_path)
    raise ConfigurationError(f"Unknown style: {style!r} (expected one of {', '.join(STYLES)})")
