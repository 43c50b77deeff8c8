import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from halftone.buffer import PixelBuffer
from halftone.config import HalftoneConfig
from halftone.controller import HalftoneController, HalftoneResult
from halftone.errors import InputError

logger = logging.getLogger(__name__)


def load_buffer(image: Image.Image | bytes | str | Path) -> PixelBuffer:
    """Decode raw image bytes, a file path, or a Pillow image into an RGBA buffer."""
    if isinstance(image, Image.Image):
        return PixelBuffer.from_image(image)
    if isinstance(image, (bytes, bytearray)):
        if not image:
            raise InputError("Image data is empty")
        source = io.BytesIO(image)
    else:
        source = Path(image)
        if not source.exists():
            raise InputError(f"File not found: {source}")
    try:
        with Image.open(source) as img:
            img.load()
            logger.debug("Decoded %s image %dx%d", img.format, img.width, img.height)
            return PixelBuffer.from_image(img)
    except (UnidentifiedImageError, OSError) as e:
        raise InputError(f"Cannot decode image: {e}") from e


def compute(image: Image.Image | bytes | str | Path, config: HalftoneConfig | None = None) -> HalftoneResult:
    controller = HalftoneController(config)
    return controller.load(load_buffer(image))
