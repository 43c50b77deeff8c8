import logging

import numpy as np

from halftone.buffer import PixelBuffer
from halftone.config import HalftoneConfig, check_cell_size, check_threshold
from halftone.engine import CellGrid
from halftone.errors import ConfigurationError

logger = logging.getLogger(__name__)

# Luminance weights (BT.601-like) scaled by 100 so thresholding stays exact in integers
LUMA_WEIGHTS = (30, 59, 11)
LUMA_SCALE = 100
WHITE = 255 * LUMA_SCALE

CONTRAST_PIVOT = 128


def luminance(r: int, g: int, b: int) -> float:
    """Weighted brightness 0.3R + 0.59G + 0.11B."""
    wr, wg, wb = LUMA_WEIGHTS
    return (wr * r + wg * g + wb * b) / LUMA_SCALE


def _scaled_luminance(samples: np.ndarray) -> np.ndarray:
    rgb = samples[..., :3].astype(np.int64)
    return rgb @ np.array(LUMA_WEIGHTS, dtype=np.int64)


def generate(buffer: PixelBuffer, cell_size: int, brightness_threshold: int) -> CellGrid:
    """Sample the top-left pixel of every cell and turn it into a dot radius.

    Transparent pixels (alpha below the threshold) and pixels brighter than the
    threshold become 0. Everything else gets a radius proportional to its
    darkness, from 0 for white up to cell_size / 2 for black. Cells along the
    right and bottom edges are kept even when they are only partially covered
    by the image.
    """
    check_cell_size(cell_size)
    check_threshold(brightness_threshold)

    arr = buffer.as_array()
    samples = arr[::cell_size, ::cell_size]  # (ceil(h / s), ceil(w / s), 4)
    luma = _scaled_luminance(samples)
    alpha = samples[..., 3].astype(np.int64)

    skip = (alpha < brightness_threshold) | (luma > brightness_threshold * LUMA_SCALE)
    max_radius = cell_size / 2
    radii = (WHITE - luma) / WHITE * max_radius
    values = np.where(skip, 0.0, np.clip(radii, 0.0, max_radius))

    logger.debug(
        "Sampled %dx%d image into %dx%d cells (%d skipped)",
        buffer.width,
        buffer.height,
        values.shape[1],
        values.shape[0],
        int(skip.sum()),
    )
    return CellGrid(values=values, cell_size=cell_size)


def adjust_contrast(buffer: PixelBuffer, factor: float) -> PixelBuffer:
    """Stretch each colour channel around mid-grey; alpha passes through unchanged."""
    if not factor > 0:
        raise ConfigurationError(f"Contrast factor must be positive, got {factor!r}")
    if factor == 1:
        return buffer

    arr = buffer.as_array().astype(np.float64)
    out = arr.copy()
    out[..., :3] = np.clip(np.rint((arr[..., :3] - CONTRAST_PIVOT) * factor + CONTRAST_PIVOT), 0, 255)
    logger.debug("Applied contrast factor %.3f", factor)
    return PixelBuffer(width=buffer.width, height=buffer.height, pixels=out.astype(np.uint8).tobytes())


def quantize(buffer: PixelBuffer, config: HalftoneConfig) -> CellGrid:
    config.validate()
    return generate(adjust_contrast(buffer, config.contrast_factor), config.cell_size, config.brightness_threshold)
