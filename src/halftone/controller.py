import dataclasses
import logging
from dataclasses import dataclass

from PIL import Image

from halftone.buffer import PixelBuffer
from halftone.config import HalftoneConfig
from halftone.engine import CellGrid
from halftone.errors import ConfigurationError, InputError
from halftone.renderers import AsciiRenderer, BlockRenderer, DotRenderer
from halftone.sampling import quantize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HalftoneResult:
    grid: CellGrid
    block_image: Image.Image
    dot_image: Image.Image
    ascii_image: Image.Image
    ascii_text: str
    source_size: tuple[int, int]  # (width, height) of the sampled image

    def surface(self, style: str) -> Image.Image:
        return {"block": self.block_image, "dot": self.dot_image, "ascii": self.ascii_image}[style]


def render_all(grid: CellGrid, config: HalftoneConfig, source_size: tuple[int, int]) -> HalftoneResult:
    ascii_renderer = AsciiRenderer(config.glyph_ramp, config.font_path)
    return HalftoneResult(
        grid=grid,
        block_image=BlockRenderer().render(grid),
        dot_image=DotRenderer().render(grid),
        ascii_image=ascii_renderer.render(grid),
        ascii_text=ascii_renderer.to_text(grid),
        source_size=source_size,
    )


class HalftoneController:
    """Holds the loaded image and current settings, and recomputes every output on change."""

    def __init__(self, config: HalftoneConfig | None = None):
        self.config = (config or HalftoneConfig()).validate()
        self.buffer: PixelBuffer | None = None
        self.result: HalftoneResult | None = None

    @property
    def grid(self) -> CellGrid | None:
        return self.result.grid if self.result is not None else None

    def load(self, buffer: PixelBuffer) -> HalftoneResult:
        result = self._compute(buffer, self.config)
        self.buffer, self.result = buffer, result
        return result

    def update(self, **changes) -> HalftoneResult | None:
        """Apply new settings and recompute; returns None when no image is loaded yet.

        A setting that fails validation or rendering leaves the previous config
        and result untouched.
        """
        try:
            config = dataclasses.replace(self.config, **changes)
        except TypeError as e:
            raise ConfigurationError(str(e)) from e
        config.validate()
        if self.buffer is None:
            self.config = config
            return None
        result = self._compute(self.buffer, config)
        self.config, self.result = config, result
        return result

    def recompute(self) -> HalftoneResult:
        if self.buffer is None:
            raise InputError("No image loaded")
        self.result = self._compute(self.buffer, self.config)
        return self.result

    def _compute(self, buffer: PixelBuffer, config: HalftoneConfig) -> HalftoneResult:
        grid = quantize(buffer, config)
        logger.debug("Recomputed %dx%d grid with %r", grid.cols, grid.rows, config)
        return render_all(grid, config, (buffer.width, buffer.height))
