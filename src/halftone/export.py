import json
from pathlib import Path

from PIL import Image

from halftone.engine import CellGrid


def save_surface(surface: Image.Image, path: str | Path, size: tuple[int, int] | None = None) -> Path:
    """Save a rendered surface as PNG, optionally scaled to size (e.g. the source image's resolution)."""
    path = Path(path)
    if size is not None and size != surface.size:
        surface = surface.resize(size, Image.NEAREST)
    surface.save(path, format="PNG")
    return path


def grid_to_json(grid: CellGrid) -> str:
    return json.dumps({"cell_size": grid.cell_size, "rows": grid.to_rows()})
