from dataclasses import dataclass

from halftone.charsets import DEFAULT
from halftone.errors import ConfigurationError

DEFAULT_CELL_SIZE = 10
DEFAULT_THRESHOLD = 200


def _is_int(value) -> bool:
    # bool is an int subclass; a checkbox value is never a cell size
    return isinstance(value, int) and not isinstance(value, bool)


def check_cell_size(cell_size) -> None:
    if not _is_int(cell_size) or cell_size <= 0:
        raise ConfigurationError(f"Cell size must be a positive integer, got {cell_size!r}")


def check_threshold(threshold) -> None:
    if not _is_int(threshold) or not 0 <= threshold <= 255:
        raise ConfigurationError(f"Brightness threshold must be an integer in [0, 255], got {threshold!r}")


@dataclass(frozen=True)
class HalftoneConfig:
    cell_size: int = DEFAULT_CELL_SIZE
    brightness_threshold: int = DEFAULT_THRESHOLD  # alpha cutoff and luminance cutoff
    contrast_factor: float = 1.0
    glyph_ramp: str = DEFAULT
    font_path: str | None = None

    def validate(self) -> "HalftoneConfig":
        check_cell_size(self.cell_size)
        check_threshold(self.brightness_threshold)
        if not isinstance(self.contrast_factor, (int, float)) or not self.contrast_factor > 0:
            raise ConfigurationError(f"Contrast factor must be positive, got {self.contrast_factor!r}")
        if not self.glyph_ramp:
            raise ConfigurationError("Glyph ramp must contain at least one character")
        return self
