from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class CellGrid:
    values: np.ndarray  # (rows, cols) float64 radii in [0, cell_size / 2]; 0 means skip
    cell_size: int

    @property
    def rows(self) -> int:
        return self.values.shape[0]

    @property
    def cols(self) -> int:
        return self.values.shape[1]

    @property
    def max_radius(self) -> float:
        return self.cell_size / 2

    @property
    def surface_size(self) -> tuple[int, int]:
        """(width, height) in pixels of any surface rendered from this grid."""
        return (self.cols * self.cell_size, self.rows * self.cell_size)

    def to_rows(self) -> list[list[float]]:
        return self.values.tolist()

    def iter_cells(self) -> Iterator[tuple[int, int, float]]:
        """Yield (x, y, radius) for every cell, where (x, y) is the cell's top-left pixel."""
        s = self.cell_size
        for r, row in enumerate(self.values):
            for c, radius in enumerate(row):
                yield c * s, r * s, float(radius)


class Renderer(Protocol):
    def render(self, grid: CellGrid) -> Image.Image:
        """Draw one primitive per cell onto a fresh surface of grid.surface_size."""
        ...
