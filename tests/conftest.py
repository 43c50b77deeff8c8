import shutil
import subprocess
from pathlib import Path

import numpy as np
import pytest

from halftone.buffer import PixelBuffer

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if Path(path).exists():
            return path
    if shutil.which("fc-match"):
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip():
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()


@pytest.fixture
def font_path():
    if FONT_PATH is None:
        pytest.skip("No monospace font found on system")
    return FONT_PATH


@pytest.fixture
def solid_buffer():
    """Factory for a uniformly coloured RGBA buffer."""

    def make(width, height, rgba):
        arr = np.empty((height, width, 4), dtype=np.uint8)
        arr[:, :] = rgba
        return PixelBuffer.from_array(arr)

    return make
